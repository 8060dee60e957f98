"""Wire codec — JSON-ready dicts <-> domain values.

Decoding only checks shape and types (via pydantic TypeAdapters); the
business rules belong to the validator.  A payload pydantic cannot
coerce raises :class:`DecodeError` carrying one violation per bad
field, so the caller can answer with a precise ``VALIDATION_FAILED``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from custreg.domain.customer import (
    Address,
    ContactInfo,
    Customer,
    CustomerInfo,
    OrganizationInfo,
    PersonInfo,
    TaxInfo,
)
from custreg.domain.validation import FieldViolation
from custreg.services.result import ServiceResult

_T = TypeVar("_T")

_INFO = TypeAdapter(CustomerInfo)
_CUSTOMER = TypeAdapter(Customer)
_ADDRESS = TypeAdapter(Address)
_CONTACT = TypeAdapter(ContactInfo)
_TAX_INFO = TypeAdapter(TaxInfo)
_INT = TypeAdapter(int)


class DecodeError(ValueError):
    """Raised when a payload cannot be turned into a domain value."""

    def __init__(self, violations: list[FieldViolation]) -> None:
        super().__init__("; ".join(v.message for v in violations))
        self.violations = violations


def _loc_to_path(root: str, loc: tuple[int | str, ...]) -> str:
    path = root
    for part in loc:
        if isinstance(part, int):
            path = f"{path}[{part}]"
        elif part in ("private", "organization"):
            # discriminated-union branch tag, not a field
            continue
        else:
            path = f"{path}.{part}" if path else str(part)
    return path or "value"


def _decode(adapter: TypeAdapter[_T], payload: Any, root: str) -> _T:
    if payload is None:
        raise DecodeError([FieldViolation(root, "required", f"{root} is required")])
    try:
        return adapter.validate_python(payload)
    except ValidationError as exc:
        violations = []
        for err in exc.errors():
            path = _loc_to_path(root, tuple(err["loc"]))
            violations.append(
                FieldViolation(field=path, rule="decode", message=f"{path}: {err['msg']}")
            )
        raise DecodeError(violations) from exc


def decode_info(payload: Mapping[str, Any] | None) -> PersonInfo | OrganizationInfo:
    """Decode ``{"kind": "private" | "organization", ...}`` into an info variant."""
    return _decode(_INFO, payload, "info")


def decode_customer(payload: Mapping[str, Any] | None) -> Customer:
    return _decode(_CUSTOMER, payload, "customer")


def decode_address(payload: Mapping[str, Any] | None) -> Address:
    return _decode(_ADDRESS, payload, "address")


def decode_contact(payload: Mapping[str, Any] | None) -> ContactInfo:
    return _decode(_CONTACT, payload, "contact")


def decode_tax_info(payload: Mapping[str, Any] | None) -> TaxInfo:
    return _decode(_TAX_INFO, payload, "tax_info")


def decode_id(value: Any) -> int:
    return _decode(_INT, value, "id")


def decode_state(value: Any) -> int:
    """Decode a state as its integer value; range checks are the validator's."""
    return _decode(_INT, value, "state")


def encode_customer(customer: Customer) -> dict[str, Any]:
    return customer.model_dump(mode="json")


def encode_result(result: ServiceResult) -> dict[str, Any]:
    """Render a ServiceResult as a JSON-ready dict."""
    data = {
        key: encode_customer(value) if isinstance(value, Customer) else value
        for key, value in result.data.items()
    }
    return result.model_copy(update={"data": data}).model_dump(mode="json")
