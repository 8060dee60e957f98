"""BaseService — shared foundation for custreg services.

Every service receives its repository and validator at construction
time; nothing is looked up from module-level state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from custreg.services.result import ErrorCode, ServiceError, ServiceResult

if TYPE_CHECKING:
    from custreg.domain.validation import ValidationResult, Validator
    from custreg.infrastructure.repository import CustomerRepository


class BaseService:
    """Base for service-layer classes.

    Usage::

        class RegistryService(BaseService):
            def get(self, customer_id: int) -> ServiceResult:
                customer = self._repo.get(customer_id)
                ...
    """

    def __init__(self, repository: CustomerRepository, validator: Validator) -> None:
        self._repo = repository
        self._validator = validator

    @staticmethod
    def _fail(
        op: str,
        code: ErrorCode,
        message: str,
        *,
        cause: BaseException | None = None,
        detail: dict[str, Any] | None = None,
    ) -> ServiceResult:
        """Build a failed result, recording *cause* for diagnostics."""
        payload: dict[str, Any] = dict(detail or {})
        if cause is not None:
            payload["cause"] = type(cause).__name__
            payload["cause_message"] = str(cause)
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=payload),
        )

    @classmethod
    def _invalid(cls, op: str, vr: ValidationResult) -> ServiceResult:
        return cls._fail(
            op,
            ErrorCode.VALIDATION_FAILED,
            "Input validation failed: " + "; ".join(vr.errors),
            detail={"fields": [v.to_dict() for v in vr.violations]},
        )
