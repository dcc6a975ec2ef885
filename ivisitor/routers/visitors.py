# ivisitor/routers/visitors.py
"""
Request API — visitor intake, reads, and the in-app status update.
POST /visitor-request       — visitor submits a request (public)
GET  /visitor/{id}          — single visitor with resident
GET  /visitors              — all visitors, newest first
PUT  /visitor-status/{id}   — resident approves/rejects in-app
"""

import traceback
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from ivisitor.database import get_db
from ivisitor.models.visitor import STATUS_APPROVED
from ivisitor.schemas.visitor import VisitorCreate, VisitorOut, VisitorWithResidentOut, StatusUpdate
from ivisitor.services import visitor_service, approval_service
from ivisitor.services.notification_service import queue_resident_request, queue_visit_approved
from ivisitor.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.get("/visitor/{visitor_id}", response_model=VisitorWithResidentOut, summary="Get a visitor by id")
def get_visitor(visitor_id: int, db: Session = Depends(get_db)):
    visitor = visitor_service.get_visitor(db, visitor_id)
    if not visitor:
        raise HTTPException(status_code=404, detail="Visitor not found")
    return visitor


@router.post("/visitor-request", response_model=VisitorOut, summary="Submit a visitor request")
def submit_visitor_request(body: VisitorCreate, background_tasks: BackgroundTasks,
                           db: Session = Depends(get_db)):
    """
    Creates a pending visitor (and the resident, on first sight of their email)
    and emails the resident approve/reject links. Email failure does not fail the request.
    """
    logger.info(f"Received visitor request: {body.visitor_email} -> {body.resident_email}")
    try:
        visitor = visitor_service.create_visitor_request(db, body)
        queue_resident_request(background_tasks, visitor)
        return visitor
    except Exception as e:
        logger.error(f"Error in visitor-request endpoint: {e}", exc_info=True)
        db.rollback()
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": str(e), "stack": traceback.format_exc()},
        )


@router.put("/visitor-status/{visitor_id}", response_model=VisitorOut, summary="Approve or reject in-app")
def update_visitor_status(visitor_id: int, body: StatusUpdate, background_tasks: BackgroundTasks,
                          db: Session = Depends(get_db)):
    """On approval the visitor is emailed their verification code (best-effort)."""
    try:
        visitor = approval_service.update_status(db, visitor_id, body.status)
    except approval_service.StatusConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if not visitor:
        raise HTTPException(status_code=404, detail="Visitor not found")

    if visitor.status == STATUS_APPROVED:
        queue_visit_approved(background_tasks, visitor)
    return visitor


@router.get("/visitors", response_model=list[VisitorWithResidentOut], summary="List all visitors")
def list_visitors(db: Session = Depends(get_db)):
    """Newest first, with 12-hour formattedTime / formattedOutTime."""
    return visitor_service.list_visitors(db)
