"""RequestHandler — pass-through bridge from wire requests to the service.

A request is a dict with an ``op`` key plus op-specific fields::

    {"op": "get", "id": 1}
    {"op": "new", "info": {"kind": "private", ...}}
    {"op": "update_info", "id": 1, "info": {...}}
    {"op": "set_state", "id": 1, "state": 2}
    {"op": "add_address", "id": 1, "address": {...}}
    {"op": "add_contact", "id": 1, "contact": {...}}
    {"op": "add_tax_info", "id": 1, "tax_info": {...}}

The handler decodes, calls the service, and encodes the ServiceResult.
It holds no business logic of its own.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from custreg.domain.validation import FieldViolation
from custreg.infrastructure.context import CallContext
from custreg.services.registry import RegistryService
from custreg.services.result import ErrorCode, ServiceError, ServiceResult
from custreg.transport.codec import (
    DecodeError,
    decode_address,
    decode_contact,
    decode_id,
    decode_info,
    decode_state,
    decode_tax_info,
    encode_result,
)

Route = Callable[[Mapping[str, Any], CallContext | None], ServiceResult]


def decode_failure(op: str, violations: list[FieldViolation]) -> ServiceResult:
    """The ServiceResult for a request that could not be decoded."""
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(
            code=ErrorCode.VALIDATION_FAILED,
            message="Malformed request: " + "; ".join(v.message for v in violations),
            detail={"fields": [v.to_dict() for v in violations], "cause": "DecodeError"},
        ),
    )


class RequestHandler:
    """Dispatch decoded requests to a :class:`RegistryService`."""

    def __init__(self, service: RegistryService) -> None:
        self._service = service
        self._routes: dict[str, Route] = {
            "get": self._get,
            "new": self._new,
            "update_info": self._update_info,
            "set_state": self._set_state,
            "add_address": self._add_address,
            "add_contact": self._add_contact,
            "add_tax_info": self._add_tax_info,
        }

    @property
    def operations(self) -> list[str]:
        return list(self._routes)

    def dispatch(self, request: Mapping[str, Any], ctx: CallContext | None = None) -> ServiceResult:
        """Decode *request* and run it; decoding problems become VALIDATION_FAILED."""
        op = str(request.get("op", ""))
        route = self._routes.get(op)
        if route is None:
            allowed = ", ".join(self._routes)
            violation = FieldViolation(
                field="op",
                rule="oneof",
                message=f"op must be one of: {allowed}",
                param=allowed,
            )
            return decode_failure(op or "unknown", [violation])
        try:
            return route(request, ctx)
        except DecodeError as exc:
            return decode_failure(op, exc.violations)

    def handle(self, request: Mapping[str, Any], ctx: CallContext | None = None) -> dict[str, Any]:
        """Like :meth:`dispatch` but returns the encoded JSON-ready response."""
        return encode_result(self.dispatch(request, ctx))

    # ------------------------------------------------------------------
    # Routes
    # ------------------------------------------------------------------

    def _get(self, req: Mapping[str, Any], ctx: CallContext | None) -> ServiceResult:
        return self._service.get(decode_id(req.get("id")), ctx=ctx)

    def _new(self, req: Mapping[str, Any], ctx: CallContext | None) -> ServiceResult:
        return self._service.new(decode_info(req.get("info")), ctx=ctx)

    def _update_info(self, req: Mapping[str, Any], ctx: CallContext | None) -> ServiceResult:
        customer_id = decode_id(req.get("id"))
        return self._service.update_info(customer_id, decode_info(req.get("info")), ctx=ctx)

    def _set_state(self, req: Mapping[str, Any], ctx: CallContext | None) -> ServiceResult:
        customer_id = decode_id(req.get("id"))
        return self._service.set_state(customer_id, decode_state(req.get("state")), ctx=ctx)

    def _add_address(self, req: Mapping[str, Any], ctx: CallContext | None) -> ServiceResult:
        customer_id = decode_id(req.get("id"))
        return self._service.add_address(customer_id, decode_address(req.get("address")), ctx=ctx)

    def _add_contact(self, req: Mapping[str, Any], ctx: CallContext | None) -> ServiceResult:
        customer_id = decode_id(req.get("id"))
        return self._service.add_contact(customer_id, decode_contact(req.get("contact")), ctx=ctx)

    def _add_tax_info(self, req: Mapping[str, Any], ctx: CallContext | None) -> ServiceResult:
        customer_id = decode_id(req.get("id"))
        tax_info = decode_tax_info(req.get("tax_info"))
        return self._service.add_tax_info(customer_id, tax_info, ctx=ctx)
