import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Column, JSON
from sqlmodel import Field, SQLModel


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class LedgerEntry(SQLModel, table=True):
    __tablename__ = "ledger_entries"

    id: str = Field(default_factory=lambda: uuid.uuid4().hex[:24], primary_key=True)
    ledger: str = Field(index=True, description="Ledger slug, e.g. worker-account")
    data: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    created_at: str = Field(default_factory=utc_now)
    updated_at: str = Field(default_factory=utc_now)
