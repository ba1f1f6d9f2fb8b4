import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from ..core.database import get_session
from ..models.User import SignInRequest, SignInResponse
from .service import authenticate_user, create_access_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sample/auth", tags=["auth"])

@router.post("/signin", response_model=SignInResponse)
async def sign_in(login_data: SignInRequest, session: Session = Depends(get_session)):
    """
    Sign in with userName and password to get an access token.
    """
    user = authenticate_user(session, login_data.userName, login_data.password)

    if not user:
        logger.info("Failed sign-in for %r", login_data.userName)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="اسم المستخدم أو كلمة المرور غير صحيحة",
            headers={"WWW-Authenticate": "Bearer"},
        )

    logger.info("Sign-in successful for %r", user.user_name)
    return SignInResponse(
        accessToken=create_access_token(user),
        role=user.role,
        message="تم تسجيل الدخول بنجاح",
    )
