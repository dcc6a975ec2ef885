# ivisitor/services/gate_service.py
"""
Guard-side verification and exit marking.

Check-in/out timestamps come from the database clock (CURRENT_DATE /
CURRENT_TIME evaluated inside the UPDATE) so every API node stamps the
same timezone regardless of its local clock.
"""

from sqlalchemy import func, update
from sqlalchemy.orm import Session
from ivisitor.models.visitor import Visitor
from ivisitor.utils.time_format import annotate_times
from ivisitor.utils.logger import get_logger

logger = get_logger(__name__)


def _stamp(db: Session, visitor_id: int, date_col: str, time_col: str) -> Visitor | None:
    db.execute(
        update(Visitor)
        .where(Visitor.id == visitor_id)
        .values({date_col: func.current_date(), time_col: func.current_time()})
        .execution_options(synchronize_session=False)
    )
    db.commit()
    visitor = db.query(Visitor).filter(Visitor.id == visitor_id).first()
    if visitor:
        db.refresh(visitor)
    return visitor


def verify_code(db: Session, visitor_id: int, code: str) -> Visitor | None:
    """
    Check a visitor's 4-digit code and stamp check-in.
    Returns None on any mismatch (unknown id or wrong code), leaving the row untouched.
    Status is not consulted.
    """
    visitor = (
        db.query(Visitor)
        .filter(Visitor.id == visitor_id, Visitor.verification_code == code)
        .first()
    )
    if not visitor:
        logger.warning(f"[GATE] Invalid code for visitor {visitor_id}")
        return None

    visitor = _stamp(db, visitor_id, "in_date", "in_time")
    logger.info(f"[GATE] Visitor {visitor_id} checked in at {visitor.in_time}")
    return annotate_times(visitor)


def mark_exit(db: Session, visitor_id: int) -> Visitor | None:
    """Stamp check-out. Does not require a prior check-in."""
    exists = db.query(Visitor.id).filter(Visitor.id == visitor_id).first()
    if not exists:
        return None

    visitor = _stamp(db, visitor_id, "out_date", "out_time")
    logger.info(f"[GATE] Visitor {visitor_id} checked out at {visitor.out_time}")
    return annotate_times(visitor)
