"""Validation Engine: verifies one-pass error collection and normalization.

Tests:
    - Every violation is reported, in schema declaration order
    - Unknown fields are stripped; defaults applied; omitted optionals absent
    - Cross-field rules run only when both sides are present and valid
    - Error paths use wire (camelCase) names
"""

from pydantic import Field

from helpdesk.core.validation import FieldError, validate
from helpdesk.schemas.common import RequestSchema
from helpdesk.schemas.ticket import TicketCreate, TicketFilter, TicketUpdate


class _Contact(RequestSchema):
    name: str = Field(min_length=2)
    email: str | None = None
    tier: str = "free"
    age: int = Field(0, ge=0)


def _fields(result) -> list[str]:
    return [e.field for e in result.errors]


# ─── Normalization ─────────────────────────────────────────────

def test_unknown_fields_are_stripped():
    result = validate(_Contact, {"name": "Ada", "isAdmin": True})
    assert result.ok
    assert result.value == {"name": "Ada", "tier": "free", "age": 0}


def test_omitted_optional_without_default_is_absent():
    result = validate(_Contact, {"name": "Ada"})
    assert "email" not in result.value


def test_explicit_null_optional_is_absent():
    result = validate(_Contact, {"name": "Ada", "email": None})
    assert "email" not in result.value


def test_empty_payload_gets_pagination_defaults():
    result = validate(TicketFilter, {})
    assert result.value == {
        "page": 1, "limit": 10, "sort_order": "desc", "sort_by": "createdAt",
    }


def test_none_payload_treated_as_empty():
    assert validate(TicketFilter, None).ok


def test_query_string_values_are_coerced():
    result = validate(TicketFilter, {"page": "2", "limit": "5"})
    assert result.value["page"] == 2
    assert result.value["limit"] == 5


def test_enum_values_normalize_to_plain_strings():
    result = validate(TicketCreate, {
        "title": "Printer jam", "description": "Paper stuck in tray 2",
    })
    assert result.value["priority"] == "medium"
    assert type(result.value["priority"]) is str
    assert result.value["status"] == "open"


# ─── Error collection ──────────────────────────────────────────

def test_collects_every_violation():
    result = validate(TicketUpdate, {"title": "a", "priority": "urgent"})
    assert not result.ok
    assert result.value is None
    assert _fields(result) == ["title", "priority"]


def test_errors_follow_declaration_order_not_input_order():
    result = validate(TicketUpdate, {"priority": "urgent", "title": "a"})
    assert _fields(result) == ["title", "priority"]


def test_missing_required_fields_reported_together():
    result = validate(TicketCreate, {})
    assert _fields(result) == ["title", "description"]


def test_error_paths_use_camel_case():
    result = validate(TicketUpdate, {"assigneeId": 0})
    assert _fields(result) == ["assigneeId"]


def test_error_details_are_plain_dicts():
    result = validate(_Contact, {})
    assert result.error_details() == [
        {"field": "name", "message": result.errors[0].message},
    ]


def test_non_object_payload_reported_on_body():
    result = validate(TicketCreate, [1, 2])
    assert not result.ok
    assert _fields(result) == ["body"]


def test_field_error_to_dict():
    assert FieldError("title", "too short").to_dict() == {
        "field": "title", "message": "too short",
    }


# ─── Cross-field rules ─────────────────────────────────────────

def test_to_date_without_from_date_is_valid():
    result = validate(TicketFilter, {"toDate": "2020-01-01"})
    assert result.ok
    assert "from_date" not in result.value


def test_equal_dates_are_valid():
    assert validate(TicketFilter, {
        "fromDate": "2020-01-01", "toDate": "2020-01-01",
    }).ok


def test_to_date_before_from_date_is_one_error_on_to_date():
    result = validate(TicketFilter, {
        "fromDate": "2020-02-01", "toDate": "2020-01-01",
    })
    assert _fields(result) == ["toDate"]
    assert "toDate must be greater than or equal to fromDate" in result.errors[0].message


def test_cross_field_rule_skipped_when_other_side_invalid():
    result = validate(TicketFilter, {"fromDate": "not-a-date", "toDate": "2020-01-01"})
    assert _fields(result) == ["fromDate"]


def test_cross_field_error_reported_with_field_errors():
    result = validate(TicketFilter, {
        "page": 0, "fromDate": "2020-02-01", "toDate": "2020-01-01",
    })
    assert _fields(result) == ["page", "toDate"]
