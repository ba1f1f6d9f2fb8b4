import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.database import create_db_and_tables
from .core.settings import settings
from .models.User import User # Import models to register them with SQLModel
from .models.LedgerEntry import LedgerEntry
from .core.init_db import init_db

from .auth.router import router as auth_router
from .ledgers.router import router as ledgers_router

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    init_db()
    yield


app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

app.include_router(auth_router)
app.include_router(ledgers_router)

@app.exception_handler(StarletteHTTPException)
async def message_exception_handler(request: Request, exc: StarletteHTTPException):
    # The dashboard reads errors from "message", not FastAPI's "detail"
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )

@app.get("/")
def read_root():
    return {"message": f"Welcome to {settings.PROJECT_NAME}"}
