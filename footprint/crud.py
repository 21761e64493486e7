# footprint/crud.py
from collections import OrderedDict
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from . import models
from .direct import ReadingSession, unit_for
from .schemas import LedgerRecord

SOURCES = ("manual", "ocr")


def _quantity_text(value: float) -> str:
    return f"{value:g}"


def records_from_session(session: ReadingSession, household_size: Optional[int] = 1) -> List[LedgerRecord]:
    """Ledger rows for every reading with a non-zero emission, amount already split per person."""
    records = []
    for r in session.readings:
        amount = session.attributed(r, household_size)
        if amount <= 0:
            continue
        description = f"{_quantity_text(r.measured_quantity)} {unit_for(r.category)}"
        if r.source == "ocr":
            description += " (OCR)"
        source = r.source if r.source in SOURCES else "manual"
        records.append(LedgerRecord(category=r.category, amount=amount, source=source,
                                    description=description))
    return records


# Ledger (append only)
def create_records(db: Session, user_id: str, records: List[LedgerRecord]):
    rows = []
    for rec in records:
        row = models.EmissionRecord(user_id=user_id, category=rec.category, amount=rec.amount,
                                    source=rec.source, description=rec.description)
        if rec.recorded_at is not None:
            row.recorded_at = rec.recorded_at
        db.add(row)
        rows.append(row)
    db.commit()
    for row in rows:
        db.refresh(row)
    return rows


def _month_window(year: int, month: int):
    start = datetime(year, month, 1)
    end = datetime(year + 1, 1, 1) if month == 12 else datetime(year, month + 1, 1)
    return start, end


def get_records_for_user(db: Session, user_id: str, year: Optional[int] = None, month: Optional[int] = None):
    q = db.query(models.EmissionRecord).filter(models.EmissionRecord.user_id == user_id)
    if year is not None and month is not None:
        start, end = _month_window(year, month)
        q = q.filter(models.EmissionRecord.recorded_at >= start, models.EmissionRecord.recorded_at < end)
    return q.order_by(models.EmissionRecord.recorded_at.desc()).all()


def category_totals(db: Session, user_id: str, year: Optional[int] = None,
                    month: Optional[int] = None) -> "OrderedDict[str, float]":
    q = (
        db.query(models.EmissionRecord.category, func.sum(models.EmissionRecord.amount))
        .filter(models.EmissionRecord.user_id == user_id)
    )
    if year is not None and month is not None:
        start, end = _month_window(year, month)
        q = q.filter(models.EmissionRecord.recorded_at >= start, models.EmissionRecord.recorded_at < end)
    rows = q.group_by(models.EmissionRecord.category).all()
    totals = OrderedDict()
    for category, total in sorted(rows, key=lambda r: r[1] or 0.0, reverse=True):
        totals[category] = float(total or 0.0)
    return totals
