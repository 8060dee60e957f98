"""Tests for the ServiceResult contract."""

from __future__ import annotations

import pytest

from custreg.services.result import ErrorCode, ServiceError, ServiceResult


class TestServiceResult:
    def test_success_defaults(self) -> None:
        r = ServiceResult(ok=True, op="get")
        assert r.data == {}
        assert r.warnings == []
        assert r.error is None
        assert r.code is None

    def test_failure_code(self) -> None:
        err = ServiceError(code=ErrorCode.NOT_FOUND, message="gone")
        r = ServiceResult(ok=False, op="get", error=err)
        assert r.code is ErrorCode.NOT_FOUND
        assert r.code == "NOT_FOUND"

    def test_frozen(self) -> None:
        r = ServiceResult(ok=True, op="get")
        with pytest.raises(Exception):
            r.ok = False  # type: ignore[misc]

    def test_error_fields(self) -> None:
        err = ServiceError(
            code=ErrorCode.VALIDATION_FAILED,
            message="bad",
            detail={"fields": [{"field": "ssn", "rule": "required", "message": "m"}]},
        )
        assert err.fields[0]["field"] == "ssn"
        assert ServiceError(code=ErrorCode.UNEXPECTED, message="x").fields == []
