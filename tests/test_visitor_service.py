# tests/test_visitor_service.py
"""Unit tests for request intake and reads."""

import re
from datetime import time
from ivisitor.models.resident import Resident
from ivisitor.models.visitor import Visitor
from ivisitor.schemas.visitor import VisitorCreate
from ivisitor.services.visitor_service import (
    create_visitor_request, generate_verification_code, generate_approval_token,
    get_visitor, list_visitors,
)


def make_body(**overrides):
    data = dict(
        visitorName="Jane Doe",
        visitorEmail="jane@example.com",
        residentName="Sam Resident",
        residentEmail="sam@example.com",
        visitReason="Dinner",
    )
    data.update(overrides)
    return VisitorCreate(**data)


class TestCodes:
    def test_verification_code_is_four_digits(self):
        for _ in range(500):
            code = generate_verification_code()
            assert re.fullmatch(r"[1-9]\d{3}", code)

    def test_tokens_are_unique_hex(self):
        tokens = {generate_approval_token() for _ in range(50)}
        assert len(tokens) == 50
        assert all(re.fullmatch(r"[0-9a-f]{64}", t) for t in tokens)


class TestCreateVisitorRequest:
    def test_persists_pending_visitor(self, db):
        visitor = create_visitor_request(db, make_body(carNumber="KA-01"))

        assert visitor.id is not None
        assert visitor.status == "pending"
        assert re.fullmatch(r"\d{4}", visitor.verification_code)
        assert visitor.car_number == "KA-01"
        assert visitor.created_at is not None

    def test_links_auto_created_resident(self, db):
        visitor = create_visitor_request(db, make_body())
        resident = db.query(Resident).filter(Resident.email == "sam@example.com").one()

        assert visitor.resident_id == resident.id
        assert resident.name == "Sam Resident"

    def test_reuses_existing_resident(self, db):
        create_visitor_request(db, make_body())
        create_visitor_request(db, make_body(visitorName="John"))

        assert db.query(Resident).count() == 1
        assert db.query(Visitor).count() == 2

    def test_blank_car_number_stored_as_null(self, db):
        visitor = create_visitor_request(db, make_body(carNumber="  "))
        assert visitor.car_number is None


class TestReads:
    def test_get_visitor_includes_resident(self, db):
        created = create_visitor_request(db, make_body())
        fetched = get_visitor(db, created.id)
        assert fetched.resident.email == "sam@example.com"

    def test_get_missing_visitor(self, db):
        assert get_visitor(db, 999) is None

    def test_list_newest_first_with_formatted_times(self, db):
        older = create_visitor_request(db, make_body(visitorName="Older"))
        newer = create_visitor_request(db, make_body(visitorName="Newer"))
        older.in_time = time(13, 5)
        older.out_time = time(0, 40)
        db.commit()

        rows = list_visitors(db)

        assert [r.id for r in rows] == [newer.id, older.id]
        assert rows[1].formatted_time == "1:05 PM"
        assert rows[1].formatted_out_time == "12:40 AM"
        assert rows[0].formatted_time is None
