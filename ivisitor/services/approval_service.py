# ivisitor/services/approval_service.py
"""
Approval workflow: pending -> approved | rejected.

Two entry points:
  - update_status(): the in-app (API key) path. Sets the status by id. It only
    insists on `pending` when ENFORCE_PENDING_ON_STATUS_UPDATE is on; otherwise
    overriding a decided visitor is allowed and logged.
  - decide_by_link(): the emailed one-click path. A single conditional UPDATE
    on id + token + status='pending', so a link can win at most once.
"""

from sqlalchemy import update
from sqlalchemy.orm import Session
from ivisitor.config import settings
from ivisitor.models.visitor import Visitor, STATUS_PENDING
from ivisitor.utils.logger import get_logger

logger = get_logger(__name__)


class StatusConflictError(Exception):
    def __init__(self, visitor_id: int, current_status: str):
        self.visitor_id = visitor_id
        self.current_status = current_status
        super().__init__(f"Visitor {visitor_id} is already {current_status}")


def update_status(db: Session, visitor_id: int, status: str) -> Visitor | None:
    visitor = db.query(Visitor).filter(Visitor.id == visitor_id).first()
    if not visitor:
        return None

    if visitor.status != STATUS_PENDING:
        if settings.ENFORCE_PENDING_ON_STATUS_UPDATE:
            raise StatusConflictError(visitor_id, visitor.status)
        logger.warning(f"Visitor {visitor_id} status overridden: {visitor.status} -> {status}")

    visitor.status = status
    db.commit()
    db.refresh(visitor)
    logger.info(f"Visitor {visitor_id} marked {status}")
    return visitor


def decide_by_link(db: Session, visitor_id: int, token: str, status: str) -> Visitor | None:
    """Apply a link decision. Returns None for a bad id/token or an already-decided visitor."""
    result = db.execute(
        update(Visitor)
        .where(
            Visitor.id == visitor_id,
            Visitor.approval_token == token,
            Visitor.status == STATUS_PENDING,
        )
        .values(status=status)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        db.rollback()
        logger.info(f"Rejected {status} link for visitor {visitor_id} (invalid, used, or decided)")
        return None

    db.commit()
    visitor = db.query(Visitor).filter(Visitor.id == visitor_id).first()
    logger.info(f"Visitor {visitor_id} {status} via email link")
    return visitor
