# ivisitor/schemas/visitor.py
"""
Request/response bodies for the visitor endpoints.
Field names are camelCase on the wire (the web client's convention);
snake_case is accepted on input as well.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel
from datetime import date, datetime, time
from typing import Literal, Optional
from ivisitor.schemas.resident import ResidentOut


class _CamelModel(BaseModel):
    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class VisitorCreate(_CamelModel):
    visitor_name: str = Field(min_length=1, max_length=200)
    visitor_email: EmailStr
    resident_name: Optional[str] = Field(default=None, max_length=200)
    resident_email: EmailStr
    visit_reason: str = Field(min_length=1)
    car_number: Optional[str] = Field(default=None, max_length=50)

    @field_validator("visitor_name", "visit_reason")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("car_number", "resident_name")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None


class StatusUpdate(_CamelModel):
    status: Literal["approved", "rejected"]


class GuardVerify(_CamelModel):
    visitor_id: int
    code: str

    @field_validator("code", mode="before")
    @classmethod
    def code_as_text(cls, v):
        # Clients sometimes post the code as a number
        return str(v).strip() if isinstance(v, (int, str)) else v


class VisitorOut(_CamelModel):
    id: int
    visitor_name: str
    visitor_email: str
    resident_name: Optional[str]
    resident_email: str
    visit_reason: str
    car_number: Optional[str]
    status: str
    verification_code: str
    approval_token: str
    in_date: Optional[date]
    in_time: Optional[time]
    out_date: Optional[date]
    out_time: Optional[time]
    created_at: Optional[datetime]
    resident_id: Optional[int]
    formatted_time: Optional[str] = None       # 12-hour in_time, e.g. "1:05 PM"
    formatted_out_time: Optional[str] = None


class VisitorWithResidentOut(VisitorOut):
    resident: Optional[ResidentOut] = None
