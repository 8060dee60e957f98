"""RegistryService — customer lifecycle orchestration.

Pipeline per call: VALIDATE → LOAD → APPLY → STORE → RESPOND.
Each call is its own transaction; nothing is retried.  Validation and
domain invariants run before any repository write, and no validation
runs while the repository holds its lock.

Failure categories (``ServiceError.code``):

- ``NOT_FOUND``: the referenced ID does not exist.
- ``VALIDATION_FAILED``: input broke one or more field rules.
- ``EXPECTED_CONFLICT``: a domain invariant rejected the change
  (info kind mismatch).
- ``UNEXPECTED``: storage failure, ID collision, timeout, cancellation.
"""

from __future__ import annotations

import random
from collections.abc import Callable

import structlog

from custreg.domain.customer import (
    Address,
    ContactInfo,
    Customer,
    OrganizationInfo,
    PersonInfo,
    TaxInfo,
    TypeMismatchError,
    new_customer_with_random_id,
)
from custreg.domain.validation import STATE_RULES, FieldViolation, ValidationResult, Validator
from custreg.infrastructure.context import CallContext, ContextError
from custreg.infrastructure.repository import (
    CustomerAlreadyExistsError,
    CustomerNotFoundError,
    CustomerRepository,
    RepositoryError,
)
from custreg.services.base import BaseService
from custreg.services.result import ErrorCode, ServiceResult
from custreg.services.telemetry import trace_span, traced

log = structlog.get_logger(__name__)

Info = PersonInfo | OrganizationInfo


class RegistryService(BaseService):
    """Get, create and modify customer records.

    Args:
        repository: Storage backend; shared, owned by the caller.
        validator: Field rule engine; a default one is built if omitted.
        rng: Source for generated IDs; a clock-seeded generator per call
            when omitted.
    """

    def __init__(
        self,
        repository: CustomerRepository,
        validator: Validator | None = None,
        *,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(repository, validator or Validator())
        self._rng = rng

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @traced
    def get(self, customer_id: int, *, ctx: CallContext | None = None) -> ServiceResult:
        op = "get"
        with trace_span("load", id=customer_id):
            try:
                customer = self._repo.get(customer_id, ctx)
            except CustomerNotFoundError as exc:
                return self._not_found(op, customer_id, exc)
            except (RepositoryError, ContextError) as exc:
                return self._unexpected(op, exc)
        return ServiceResult(ok=True, op=op, data={"customer": customer})

    @traced
    def new(self, info: Info | None, *, ctx: CallContext | None = None) -> ServiceResult:
        """Create a customer in state PROSPECT under a fresh random ID.

        An ID collision is reported as ``UNEXPECTED``; retrying with a
        new ID is left to the caller.
        """
        op = "new"
        with trace_span("validate"):
            vr = self._validate_info(info)
        if not vr.valid:
            log.debug("customer.rejected", op=op, fields=vr.fields)
            return self._invalid(op, vr)

        customer = new_customer_with_random_id(info, self._rng)

        with trace_span("store"):
            try:
                self._repo.insert(customer, ctx)
            except CustomerAlreadyExistsError as exc:
                log.warning("customer.id_collision", customer_id=customer.id)
                return self._unexpected(op, exc)
            except (RepositoryError, ContextError) as exc:
                return self._unexpected(op, exc)

        log.debug("customer.created", customer_id=customer.id, type=customer.type().name)
        return ServiceResult(ok=True, op=op, data={"customer": customer})

    @traced
    def update_info(
        self,
        customer_id: int,
        info: Info | None,
        *,
        ctx: CallContext | None = None,
    ) -> ServiceResult:
        """Replace the info of an existing customer of the same kind."""
        op = "update_info"
        with trace_span("validate"):
            vr = self._validate_info(info)
        if not vr.valid:
            return self._invalid(op, vr)
        assert info is not None
        return self._apply(op, customer_id, lambda c: c.update_info(info), ctx)

    @traced
    def set_state(
        self,
        customer_id: int,
        state: int,
        *,
        ctx: CallContext | None = None,
    ) -> ServiceResult:
        op = "set_state"
        with trace_span("validate"):
            vr = self._validator.validate_value(state, STATE_RULES, field="state")
        if not vr.valid:
            return self._invalid(op, vr)
        return self._apply(op, customer_id, lambda c: c.set_state(state), ctx)

    @traced
    def add_address(
        self,
        customer_id: int,
        address: Address | None,
        *,
        ctx: CallContext | None = None,
    ) -> ServiceResult:
        op = "add_address"
        with trace_span("validate"):
            vr = self._validator.validate(address, root="address")
        if not vr.valid:
            return self._invalid(op, vr)
        assert address is not None
        return self._apply(op, customer_id, lambda c: c.add_address(address), ctx)

    @traced
    def add_contact(
        self,
        customer_id: int,
        contact: ContactInfo | None,
        *,
        ctx: CallContext | None = None,
    ) -> ServiceResult:
        op = "add_contact"
        with trace_span("validate"):
            vr = self._validator.validate(contact, root="contact")
        if not vr.valid:
            return self._invalid(op, vr)
        assert contact is not None
        return self._apply(op, customer_id, lambda c: c.add_contact(contact), ctx)

    @traced
    def add_tax_info(
        self,
        customer_id: int,
        tax_info: TaxInfo | None,
        *,
        ctx: CallContext | None = None,
    ) -> ServiceResult:
        op = "add_tax_info"
        with trace_span("validate"):
            vr = self._validator.validate(tax_info, root="tax_info")
        if not vr.valid:
            return self._invalid(op, vr)
        assert tax_info is not None
        return self._apply(op, customer_id, lambda c: c.add_tax_info(tax_info), ctx)

    @traced
    def validate_info(self, info: Info | None) -> ServiceResult:
        """Dry run: report every rule *info* violates without storing anything."""
        op = "validate"
        vr = self._validate_info(info)
        if not vr.valid:
            return self._invalid(op, vr)
        assert info is not None
        return ServiceResult(ok=True, op=op, data={"type": info.type().name.lower()})

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def _validate_info(self, info: object) -> ValidationResult:
        if info is not None and not isinstance(info, (PersonInfo, OrganizationInfo)):
            message = f"info must be private or organization data, got {type(info).__name__}"
            return ValidationResult([FieldViolation("info", "kind", message)])
        return self._validator.validate(info, root="info")

    def _apply(
        self,
        op: str,
        customer_id: int,
        mutate: Callable[[Customer], None],
        ctx: CallContext | None,
    ) -> ServiceResult:
        """LOAD → APPLY → STORE for an already validated change.

        Load and store each take the repository lock separately; the
        sequence as a whole is not atomic.  Two concurrent calls on the
        same ID may both load the same record, and the later store wins,
        so one of two concurrent appends can be lost.
        """
        with trace_span("load", id=customer_id):
            try:
                customer = self._repo.get(customer_id, ctx)
            except CustomerNotFoundError as exc:
                return self._not_found(op, customer_id, exc)
            except (RepositoryError, ContextError) as exc:
                return self._unexpected(op, exc)

        try:
            mutate(customer)
        except TypeMismatchError as exc:
            log.debug("customer.type_mismatch", op=op, customer_id=customer_id)
            return self._fail(
                op,
                ErrorCode.EXPECTED_CONFLICT,
                str(exc),
                cause=exc,
                detail={
                    "current_type": exc.current.name.lower(),
                    "attempted_type": exc.attempted.name.lower(),
                },
            )

        with trace_span("store"):
            try:
                self._repo.update(customer, ctx)
            except (RepositoryError, ContextError) as exc:
                return self._unexpected(op, exc)

        log.debug("customer.updated", op=op, customer_id=customer_id)
        return ServiceResult(ok=True, op=op, data={"customer": customer})

    def _not_found(self, op: str, customer_id: int, exc: Exception) -> ServiceResult:
        return self._fail(
            op,
            ErrorCode.NOT_FOUND,
            f"No customer found with ID: {customer_id}",
            cause=exc,
            detail={"id": customer_id},
        )

    def _unexpected(self, op: str, exc: Exception) -> ServiceResult:
        log.warning("registry.unexpected", op=op, error=str(exc), cause=type(exc).__name__)
        return self._fail(op, ErrorCode.UNEXPECTED, f"Unexpected error: {exc}", cause=exc)
