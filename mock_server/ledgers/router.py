import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlmodel import Session

from dashboard.core.catalog import find_ledger
from dashboard.core.rbac import resolve_permissions

from ..auth.service import get_current_role
from ..core.database import get_session
from .service import create_entry, delete_entry, get_entry, list_entries, to_response, update_entry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["ledgers"])

ACCESS_DENIED = "غير مخول للوصول إلى هذه الصفحة"


def _authorize(ledger: str, role: str, action: str) -> None:
    """
    Server-side re-check of the same policy the dashboard applies.
    action is one of "access", "edit", "delete".
    """
    entry = find_ledger(ledger)
    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ledger not found")
    _section, sub, _ledger = entry

    permissions = resolve_permissions(role, sub.component)
    if not getattr(permissions, f"can_{action}"):
        logger.info("Denied %s on %s for role %r", action, ledger, role)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=ACCESS_DENIED)


@router.get("/{ledger}")
async def read_entries(
    ledger: str,
    role: Annotated[str, Depends(get_current_role)],
    session: Session = Depends(get_session),
):
    _authorize(ledger, role, "access")
    return [to_response(entry) for entry in list_entries(session, ledger)]


@router.post("/{ledger}", status_code=status.HTTP_201_CREATED)
async def add_entry(
    ledger: str,
    role: Annotated[str, Depends(get_current_role)],
    record: dict[str, Any] = Body(...),
    session: Session = Depends(get_session),
):
    _authorize(ledger, role, "access")
    return to_response(create_entry(session, ledger, record))


@router.put("/{ledger}/{entry_id}")
async def edit_entry(
    ledger: str,
    entry_id: str,
    role: Annotated[str, Depends(get_current_role)],
    fields: dict[str, Any] = Body(...),
    session: Session = Depends(get_session),
):
    _authorize(ledger, role, "edit")
    entry = get_entry(session, ledger, entry_id)
    return to_response(update_entry(session, entry, fields))


@router.delete("/{ledger}/{entry_id}")
async def remove_entry(
    ledger: str,
    entry_id: str,
    role: Annotated[str, Depends(get_current_role)],
    session: Session = Depends(get_session),
):
    _authorize(ledger, role, "delete")
    delete_entry(session, get_entry(session, ledger, entry_id))
    return {"message": "تم حذف السجل بنجاح"}
