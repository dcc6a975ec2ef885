# ivisitor/services/visitor_service.py
"""
Request intake + reads over the visitors table.

create_visitor_request() provisions the resident, issues the 4-digit
verification code and the approval token, and stores the request as pending.
Emailing the resident is the router's job (it owns BackgroundTasks).
"""

import secrets
from sqlalchemy.orm import Session, joinedload
from ivisitor.models.visitor import Visitor, STATUS_PENDING
from ivisitor.schemas.visitor import VisitorCreate
from ivisitor.services.resident_service import get_or_create_resident
from ivisitor.utils.time_format import annotate_times
from ivisitor.utils.logger import get_logger

logger = get_logger(__name__)


def generate_verification_code() -> str:
    """Uniform 4-digit code in 1000–9999."""
    return str(1000 + secrets.randbelow(9000))


def generate_approval_token() -> str:
    return secrets.token_hex(32)


def create_visitor_request(db: Session, body: VisitorCreate) -> Visitor:
    resident = get_or_create_resident(db, body.resident_email, body.resident_name)

    visitor = Visitor(
        visitor_name=body.visitor_name,
        visitor_email=body.visitor_email,
        resident_name=body.resident_name,
        resident_email=body.resident_email,
        visit_reason=body.visit_reason,
        car_number=body.car_number,
        status=STATUS_PENDING,
        verification_code=generate_verification_code(),
        approval_token=generate_approval_token(),
        resident_id=resident.id,
    )
    db.add(visitor)
    db.commit()
    db.refresh(visitor)
    logger.info(f"Visitor request {visitor.id} from {visitor.visitor_email} for {visitor.resident_email}")
    return visitor


def get_visitor(db: Session, visitor_id: int) -> Visitor | None:
    return (
        db.query(Visitor)
        .options(joinedload(Visitor.resident))
        .filter(Visitor.id == visitor_id)
        .first()
    )


def list_visitors(db: Session) -> list[Visitor]:
    """All visitors newest first, each annotated with 12-hour in/out times."""
    visitors = (
        db.query(Visitor)
        .options(joinedload(Visitor.resident))
        .order_by(Visitor.created_at.desc(), Visitor.id.desc())
        .all()
    )
    return [annotate_times(v) for v in visitors]
