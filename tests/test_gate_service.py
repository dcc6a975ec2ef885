# tests/test_gate_service.py
"""Unit tests for guard verification and exit marking."""

import re
import pytest
from ivisitor.models.visitor import Visitor
from ivisitor.schemas.visitor import VisitorCreate
from ivisitor.services.visitor_service import create_visitor_request
from ivisitor.services.gate_service import verify_code, mark_exit

TIME_12H = re.compile(r"^(1[0-2]|[1-9]):[0-5]\d (AM|PM)$")


@pytest.fixture
def visitor(db):
    return create_visitor_request(db, VisitorCreate(
        visitorName="Jane Doe", visitorEmail="jane@example.com",
        residentName="Sam", residentEmail="sam@example.com", visitReason="Dinner",
    ))


def _wrong_code(code: str) -> str:
    return "1000" if code != "1000" else "1001"


class TestVerifyCode:
    def test_correct_code_stamps_check_in(self, db, visitor):
        checked_in = verify_code(db, visitor.id, visitor.verification_code)

        assert checked_in.in_date is not None
        assert checked_in.in_time is not None
        assert TIME_12H.match(checked_in.formatted_time)

    def test_wrong_code_leaves_row_unchanged(self, db, visitor):
        assert verify_code(db, visitor.id, _wrong_code(visitor.verification_code)) is None

        row = db.get(Visitor, visitor.id)
        assert row.in_date is None and row.in_time is None

    def test_unknown_id(self, db, visitor):
        assert verify_code(db, visitor.id + 1, visitor.verification_code) is None

    def test_status_not_consulted(self, db, visitor):
        visitor.status = "rejected"
        db.commit()
        assert verify_code(db, visitor.id, visitor.verification_code) is not None


class TestMarkExit:
    def test_exit_without_check_in(self, db, visitor):
        left = mark_exit(db, visitor.id)

        assert left.out_date is not None
        assert left.out_time is not None
        assert left.in_time is None
        assert TIME_12H.match(left.formatted_out_time)

    def test_exit_after_check_in(self, db, visitor):
        verify_code(db, visitor.id, visitor.verification_code)
        left = mark_exit(db, visitor.id)
        assert left.in_time is not None and left.out_time is not None

    def test_unknown_id(self, db):
        assert mark_exit(db, 12345) is None
