"""Error Hierarchy: verifies codes, HTTP statuses and envelope rendering."""

from helpdesk.core.errors import (
    ConflictError, DatabaseError, ErrorCategory, ErrorSeverity,
    HealthReportUnavailableError, HelpdeskError, ResourceNotFoundError,
    UnauthorizedError, ValidationFailedError,
)


def test_not_found_message_and_status():
    err = ResourceNotFoundError("Ticket", 7)
    assert err.message == "Ticket with ID 7 not found"
    assert err.http_status == 404
    body = err.to_response()
    assert body["code"] == "NOT_FOUND"
    assert "data" not in body
    assert "details" not in body


def test_validation_failed_carries_details():
    details = [{"field": "title", "message": "too short"}]
    err = ValidationFailedError(details)
    assert err.http_status == 400
    assert err.to_response()["details"] == details
    assert err.category is ErrorCategory.VALIDATION


def test_conflict_points_at_field():
    err = ConflictError("Email is already registered", "email")
    assert err.http_status == 409
    assert err.to_response()["details"] == [
        {"field": "email", "message": "Email is already registered"},
    ]


def test_unauthorized_default_message():
    err = UnauthorizedError()
    assert err.http_status == 401
    assert err.message == "Authentication required"


def test_infrastructure_errors_are_critical():
    assert DatabaseError("boom", "query").severity is ErrorSeverity.CRITICAL
    assert DatabaseError("boom", "query").http_status == 503
    err = HealthReportUnavailableError("psutil failed")
    assert err.severity is ErrorSeverity.CRITICAL
    assert err.reason == "psutil failed"
    assert err.message == "Failed to retrieve health information"


def test_all_errors_share_base():
    for err in (
        ResourceNotFoundError("User", 1), UnauthorizedError(),
        ConflictError("x", "y"), DatabaseError("x", "y"),
    ):
        assert isinstance(err, HelpdeskError)
