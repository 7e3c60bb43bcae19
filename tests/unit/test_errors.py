"""Tests for qm_common.errors and qm_common.response."""

from src.qm_common.errors import (
    AppError,
    DropAlreadySoldError,
    DropLockedByOtherError,
    DropNotFoundError,
    InvalidDropConfigError,
    ResetNotAllowedError,
)
from src.qm_common.response import ApiResponse, error_response, success_response


class TestAppError:
    def test_base_error(self) -> None:
        err = AppError(code=9002, message="Internal error")
        assert err.code == 9002
        assert err.message == "Internal error"
        assert err.http_status == 500

    def test_is_exception(self) -> None:
        assert isinstance(AppError(code=3001, message="x"), Exception)


class TestDropErrors:
    def test_not_found(self) -> None:
        err = DropNotFoundError("iphone17")
        assert err.code == 3001
        assert err.http_status == 404
        assert "iphone17" in err.message

    def test_already_sold(self) -> None:
        err = DropAlreadySoldError("ps5slim")
        assert err.code == 3002
        assert err.http_status == 409

    def test_locked_by_other(self) -> None:
        err = DropLockedByOtherError("ps5slim")
        assert err.code == 3003
        assert err.http_status == 409

    def test_invalid_config(self) -> None:
        err = InvalidDropConfigError("min_price exceeds base_price")
        assert err.code == 3004
        assert err.http_status == 422
        assert "min_price" in err.message

    def test_reset_not_allowed(self) -> None:
        err = ResetNotAllowedError()
        assert err.code == 9003
        assert err.http_status == 403


class TestApiResponse:
    def test_success(self) -> None:
        resp = success_response({"product_id": "iphone17"})
        assert resp.code == 0
        assert resp.message == "success"
        assert resp.data == {"product_id": "iphone17"}

    def test_success_keeps_request_id(self) -> None:
        resp = success_response(None, request_id="req_abc")
        assert resp.request_id == "req_abc"

    def test_generated_request_id(self) -> None:
        assert success_response().request_id.startswith("req_")

    def test_error(self) -> None:
        resp = error_response(3002, "Product is already sold")
        assert resp.code == 3002
        assert resp.data is None

    def test_serialization(self) -> None:
        d = ApiResponse(data={"price": 109600}).model_dump()
        assert set(d) == {"code", "message", "data", "timestamp", "request_id"}
