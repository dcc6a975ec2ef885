# ivisitor/services/resident_service.py
"""
Resident auto-provisioning.
Residents are keyed by email. The first visitor request naming an unknown
email creates the row; a concurrent request that loses the unique-email race
rolls back and re-reads the winner's row.
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from ivisitor.models.resident import Resident
from ivisitor.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_RESIDENT_NAME = "Resident"


class ResidentProvisioningError(Exception):
    """Raised when a resident can neither be created nor found."""


def get_resident_by_email(db: Session, email: str) -> Resident | None:
    return db.query(Resident).filter(Resident.email == email).first()


def get_or_create_resident(db: Session, email: str, name: str | None = None) -> Resident:
    resident = get_resident_by_email(db, email)
    if resident:
        return resident

    resident = Resident(name=name or DEFAULT_RESIDENT_NAME, email=email)
    db.add(resident)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning(f"Resident {email} created concurrently — re-reading")
        resident = get_resident_by_email(db, email)
        if not resident:
            raise ResidentProvisioningError("Failed to create or find resident")
        return resident

    db.refresh(resident)
    logger.info(f"Created new resident: {email}")
    return resident
