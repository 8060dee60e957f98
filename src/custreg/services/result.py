"""Result envelope returned by every registry service call.

Callers branch on :class:`ErrorCode`, never on message text.  Successful
calls put their payload in ``data``; failures carry a :class:`ServiceError`
whose ``detail`` holds the cause and any violated fields.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorCode(StrEnum):
    NOT_FOUND = "NOT_FOUND"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    EXPECTED_CONFLICT = "EXPECTED_CONFLICT"
    UNEXPECTED = "UNEXPECTED"


class ServiceError(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: ErrorCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @property
    def fields(self) -> list[dict[str, str]]:
        """Violated fields as ``{field, rule, message}`` dicts."""
        return list(self.detail.get("fields", []))


class ServiceResult(BaseModel):
    """Outcome of one operation.

    ``op`` names the operation (``"get"``, ``"set_state"``...).  ``meta`` is
    only populated when telemetry is on.
    """

    model_config = ConfigDict(frozen=True)

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @property
    def code(self) -> ErrorCode | None:
        return None if self.error is None else self.error.code
