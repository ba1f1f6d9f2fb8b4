from fastapi import HTTPException, status
from sqlmodel import Session, select

from ..models.LedgerEntry import LedgerEntry, utc_now

META_FIELDS = ("_id", "id", "createdAt", "updatedAt")


def _clean(data: dict) -> dict:
    return {k: v for k, v in data.items() if k not in META_FIELDS}


def to_response(entry: LedgerEntry) -> dict:
    return {"_id": entry.id, **entry.data, "createdAt": entry.created_at, "updatedAt": entry.updated_at}


def list_entries(session: Session, ledger: str) -> list[LedgerEntry]:
    statement = select(LedgerEntry).where(LedgerEntry.ledger == ledger)
    return session.exec(statement).all()


def get_entry(session: Session, ledger: str, entry_id: str) -> LedgerEntry:
    entry = session.get(LedgerEntry, entry_id)
    if not entry or entry.ledger != ledger:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="السجل غير موجود"
        )
    return entry


def create_entry(session: Session, ledger: str, data: dict) -> LedgerEntry:
    entry = LedgerEntry(ledger=ledger, data=_clean(data))
    session.add(entry)
    session.commit()
    session.refresh(entry)
    return entry


def update_entry(session: Session, entry: LedgerEntry, fields: dict) -> LedgerEntry:
    # Reassign (not mutate) so the JSON column is flagged dirty
    entry.data = {**entry.data, **_clean(fields)}
    entry.updated_at = utc_now()
    session.add(entry)
    session.commit()
    session.refresh(entry)
    return entry


def delete_entry(session: Session, entry: LedgerEntry) -> None:
    session.delete(entry)
    session.commit()
