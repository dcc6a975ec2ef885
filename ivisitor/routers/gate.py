# ivisitor/routers/gate.py
"""Guard endpoints — code verification at entry, exit marking."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from ivisitor.database import get_db
from ivisitor.schemas.visitor import GuardVerify, VisitorOut
from ivisitor.services.gate_service import verify_code, mark_exit

router = APIRouter()


@router.post("/guard-verify", response_model=VisitorOut, summary="Verify a visitor's code at the gate")
def guard_verify(body: GuardVerify, db: Session = Depends(get_db)):
    """Stamps check-in on a match and returns the record with formattedTime."""
    visitor = verify_code(db, body.visitor_id, body.code)
    if not visitor:
        raise HTTPException(status_code=400, detail="Invalid verification code")
    return visitor


@router.put("/visitor-exit/{visitor_id}", response_model=VisitorOut, summary="Mark a visitor's exit")
def visitor_exit(visitor_id: int, db: Session = Depends(get_db)):
    visitor = mark_exit(db, visitor_id)
    if not visitor:
        raise HTTPException(status_code=404, detail="Visitor not found")
    return visitor
