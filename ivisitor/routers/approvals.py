# ivisitor/routers/approvals.py
"""
One-click approve/reject links from the resident's email.
GET /approve/{id}/{token}
GET /reject/{id}/{token}
Both render an HTML page (never JSON). A wrong token, a used link and an
already-decided visitor all look the same to the caller.
"""

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session
from ivisitor.database import get_db
from ivisitor.models.visitor import STATUS_APPROVED, STATUS_REJECTED
from ivisitor.services.approval_service import decide_by_link
from ivisitor.services.notification_service import queue_visit_approved, queue_visit_rejected
from ivisitor.utils.templates import templates
from ivisitor.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


def _success_page(request: Request, message: str, details: str = "") -> HTMLResponse:
    return templates.TemplateResponse(request, "pages/success.html",
                                      {"message": message, "details": details})


def _error_page(request: Request, message: str) -> HTMLResponse:
    return templates.TemplateResponse(request, "pages/error.html", {"message": message})


def _parse_id(raw: str) -> int | None:
    # Anything but a positive ASCII integer is a bad link
    return int(raw) if raw.isascii() and raw.isdigit() and int(raw) > 0 else None


@router.get("/approve/{visitor_id}/{token}", response_class=HTMLResponse, summary="Approve via email link")
def approve_by_link(visitor_id: str, token: str, request: Request, background_tasks: BackgroundTasks,
                    db: Session = Depends(get_db)):
    try:
        visitor_pk = _parse_id(visitor_id)
        visitor = decide_by_link(db, visitor_pk, token, STATUS_APPROVED) if visitor_pk else None
        if not visitor:
            return _error_page(request, "Invalid or expired approval link.")
        queue_visit_approved(background_tasks, visitor)
        return _success_page(request, "Visitor approved successfully!",
                             f"Verification code sent to {visitor.visitor_email}")
    except Exception as e:
        logger.error(f"Error in approval link for visitor {visitor_id}: {e}", exc_info=True)
        return _error_page(request, "Failed to approve visitor.")


@router.get("/reject/{visitor_id}/{token}", response_class=HTMLResponse, summary="Reject via email link")
def reject_by_link(visitor_id: str, token: str, request: Request, background_tasks: BackgroundTasks,
                   db: Session = Depends(get_db)):
    try:
        visitor_pk = _parse_id(visitor_id)
        visitor = decide_by_link(db, visitor_pk, token, STATUS_REJECTED) if visitor_pk else None
        if not visitor:
            return _error_page(request, "Invalid or expired rejection link.")
        queue_visit_rejected(background_tasks, visitor)
        return _success_page(request, "Visitor rejected.", f"{visitor.visitor_name} has been notified.")
    except Exception as e:
        logger.error(f"Error in rejection link for visitor {visitor_id}: {e}", exc_info=True)
        return _error_page(request, "Failed to reject visitor.")
