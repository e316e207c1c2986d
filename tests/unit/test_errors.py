"""Tests for kost_common.errors and kost_common.response."""

from src.kost_common.errors import (
    AppError,
    BalanceInconsistentError,
    InvalidPaymentDateError,
    NoRoomAssignmentError,
    RoomInUseError,
    RoomNotAvailableError,
    RoomNotFoundError,
    RoomOccupiedError,
    ServiceUnavailableError,
    TenantMovedOutError,
    TenantNotFoundError,
)
from src.kost_common.response import ApiResponse, error_response, success_response


class TestAppError:
    def test_base_error(self) -> None:
        err = AppError(code=9002, message="Internal error")
        assert err.code == 9002
        assert err.message == "Internal error"
        assert err.http_status == 500

    def test_is_exception(self) -> None:
        assert isinstance(AppError(code=1001, message="test"), Exception)


class TestDomainErrors:
    def test_tenant_not_found(self) -> None:
        err = TenantNotFoundError("t-1")
        assert err.code == 2001
        assert err.http_status == 404
        assert "t-1" in err.message

    def test_tenant_moved_out(self) -> None:
        err = TenantMovedOutError("t-1")
        assert (err.code, err.http_status) == (2002, 409)

    def test_room_not_found(self) -> None:
        err = RoomNotFoundError("r-1")
        assert (err.code, err.http_status) == (3001, 404)

    def test_room_occupied(self) -> None:
        assert RoomOccupiedError("r-1").http_status == 409

    def test_room_not_available_names_status(self) -> None:
        err = RoomNotAvailableError("r-1", "under_renovation")
        assert err.code == 3004
        assert "under_renovation" in err.message

    def test_room_in_use(self) -> None:
        assert RoomInUseError("r-1").code == 3005

    def test_future_payment_date(self) -> None:
        err = InvalidPaymentDateError("2099-01-01")
        assert (err.code, err.http_status) == (4001, 422)

    def test_no_room_assignment_is_client_error(self) -> None:
        err = NoRoomAssignmentError("t-1")
        assert (err.code, err.http_status) == (5001, 400)

    def test_inconsistent_message_is_generic(self) -> None:
        err = BalanceInconsistentError()
        assert (err.code, err.http_status) == (5002, 500)
        assert err.message == "Balance data is inconsistent"

    def test_service_unavailable(self) -> None:
        err = ServiceUnavailableError()
        assert (err.code, err.http_status) == (9003, 503)


class TestApiResponse:
    def test_success(self) -> None:
        resp = success_response({"k": "v"})
        assert resp.code == 0
        assert resp.message == "success"
        assert resp.data == {"k": "v"}
        assert resp.request_id.startswith("req_")
        assert resp.timestamp

    def test_error(self) -> None:
        resp = error_response(2001, "Tenant not found: t-1")
        assert resp.code == 2001
        assert resp.data is None

    def test_serializes(self) -> None:
        dumped = ApiResponse(data={"outstanding_balance": "0.00"}).model_dump()
        assert dumped["data"]["outstanding_balance"] == "0.00"
        assert set(dumped) == {"code", "message", "data", "timestamp", "request_id"}
