"""Declarative field validation — rule table plus a generic engine.

Bindings map each model field to a rule spec string such as
``"required,iso3166_1_alpha2"`` or ``"min=1,max=3"``.  The engine looks
each rule name up in a registry of predicates and evaluates every
binding, so a single call reports *all* violated fields rather than the
first one.  Within one field, evaluation stops at the first failing rule.

Validation is recursive: nested models that have bindings of their own
(the customer's info variant, its sub-records) are validated in place
with dotted paths such as ``info.ssn`` or ``addresses[0].country``.

INVARIANT: Validation never mutates the value under test.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from functools import lru_cache
from typing import Any

from pydantic import BaseModel

from custreg.domain.countries import is_alpha2
from custreg.domain.customer import (
    UINT32_MAX,
    Address,
    ContactInfo,
    Customer,
    OrganizationInfo,
    PersonInfo,
    TaxInfo,
)
from custreg.domain.types import STATE_MAX, STATE_MIN

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

ASCII_DIGITS = frozenset("0123456789")
PERSON_NAME_INNER = frozenset("-")
ORG_NAME_INNER = frozenset("-& ")

# digits with an optional leading "+", E.164 length
PHONE_RE = re.compile(r"^\+?[0-9]{3,15}$")

# RFC 5322 derived (WHATWG form of the addr-spec)
EMAIL_RE = re.compile(
    r"^[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)*$"
)

# ---------------------------------------------------------------------------
# Field bindings
# ---------------------------------------------------------------------------

STATE_RULES = f"integer,min={int(STATE_MIN)},max={int(STATE_MAX)}"

FIELD_RULES: dict[type[BaseModel], dict[str, str]] = {
    Customer: {
        "id": "required,uint32",
        "state": STATE_RULES,
        "info": "required",
    },
    PersonInfo: {
        "given_name": "person-name",
        "family_name": "person-name",
        "ssn": "required",
        "date_of_birth": "required,before",
        "citizenship": "required,iso3166_1_alpha2",
    },
    OrganizationInfo: {
        "name": "org-name",
        "form": "required",
        "legal_id": "required",
        "registration_date": "required,before",
        "registration_country": "required,iso3166_1_alpha2",
    },
    Address: {
        "street": "required",
        "postal_code": "required",
        "city": "required",
        "country": "required,iso3166_1_alpha2",
    },
    ContactInfo: {
        "phone": "required_without_all=mobile email,omitempty,phone",
        "mobile": "omitempty,phone",
        "email": "omitempty,email",
    },
    TaxInfo: {
        "country": "required,iso3166_1_alpha2",
        "tax_id": "required",
    },
}


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FieldViolation:
    """One failed rule on one field."""

    field: str
    rule: str
    message: str
    param: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "rule": self.rule, "message": self.message}


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation pass; empty ``violations`` means valid."""

    violations: list[FieldViolation] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.violations

    @property
    def errors(self) -> list[str]:
        return [v.message for v in self.violations]

    @property
    def fields(self) -> list[str]:
        return [v.field for v in self.violations]


@dataclass(frozen=True)
class RuleContext:
    """What a rule predicate may look at besides the value itself."""

    parent: Any
    now: datetime


RuleFunc = Callable[[Any, str, RuleContext], bool]


# ---------------------------------------------------------------------------
# Rule predicates
# ---------------------------------------------------------------------------


def _is_zero(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, bytes, list, tuple, dict, set)):
        return len(value) == 0
    if isinstance(value, bool):
        return value is False
    if isinstance(value, (int, float)):
        return value == 0
    return False


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _measure(value: Any) -> float | None:
    if _is_number(value):
        return float(value)
    if isinstance(value, (str, list, tuple)):
        return float(len(value))
    return None


def rule_required(value: Any, param: str, ctx: RuleContext) -> bool:
    return not _is_zero(value)


def rule_min(value: Any, param: str, ctx: RuleContext) -> bool:
    measured = _measure(value)
    return measured is not None and measured >= float(param)


def rule_max(value: Any, param: str, ctx: RuleContext) -> bool:
    measured = _measure(value)
    return measured is not None and measured <= float(param)


def rule_integer(value: Any, param: str, ctx: RuleContext) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def rule_uint32(value: Any, param: str, ctx: RuleContext) -> bool:
    return rule_integer(value, param, ctx) and 0 <= value <= UINT32_MAX


def is_letter(ch: str) -> bool:
    """True for Unicode category L* only (no digits, numerals or marks)."""
    return unicodedata.category(ch).startswith("L")


def _is_org_char(ch: str) -> bool:
    return ch in ASCII_DIGITS or is_letter(ch)


def _shaped_name(value: Any, edge: Callable[[str], bool], inner: frozenset[str]) -> bool:
    # edge characters at both ends; separators from *inner* only in between
    if not isinstance(value, str) or not value:
        return False
    if not (edge(value[0]) and edge(value[-1])):
        return False
    return all(edge(ch) or ch in inner for ch in value[1:-1])


def rule_person_name(value: Any, param: str, ctx: RuleContext) -> bool:
    return _shaped_name(value, is_letter, PERSON_NAME_INNER)


def rule_org_name(value: Any, param: str, ctx: RuleContext) -> bool:
    return _shaped_name(value, _is_org_char, ORG_NAME_INNER)


def rule_iso3166_1_alpha2(value: Any, param: str, ctx: RuleContext) -> bool:
    return isinstance(value, str) and is_alpha2(value)


def rule_phone(value: Any, param: str, ctx: RuleContext) -> bool:
    return isinstance(value, str) and PHONE_RE.fullmatch(value) is not None


def rule_email(value: Any, param: str, ctx: RuleContext) -> bool:
    return isinstance(value, str) and EMAIL_RE.fullmatch(value) is not None


def rule_before(value: Any, param: str, ctx: RuleContext) -> bool:
    """Strictly earlier than the evaluation time.

    A plain date counts as midnight UTC of that day.
    """
    if isinstance(value, datetime):
        moment = value if value.tzinfo is not None else value.replace(tzinfo=UTC)
    elif isinstance(value, date):
        moment = datetime(value.year, value.month, value.day, tzinfo=UTC)
    else:
        return False
    return moment < ctx.now


def rule_required_without_all(value: Any, param: str, ctx: RuleContext) -> bool:
    """Passes when the value is set, or when any sibling named in *param* is set."""
    if not _is_zero(value):
        return True
    siblings = param.split()
    return any(not _is_zero(getattr(ctx.parent, name, None)) for name in siblings)


DEFAULT_RULES: dict[str, RuleFunc] = {
    "required": rule_required,
    "min": rule_min,
    "max": rule_max,
    "integer": rule_integer,
    "uint32": rule_uint32,
    "person-name": rule_person_name,
    "org-name": rule_org_name,
    "iso3166_1_alpha2": rule_iso3166_1_alpha2,
    "phone": rule_phone,
    "email": rule_email,
    "before": rule_before,
    "required_without_all": rule_required_without_all,
}

_MESSAGES: dict[str, str] = {
    "required": "{field} is required",
    "min": "{field} must be at least {param}",
    "max": "{field} must be at most {param}",
    "integer": "{field} must be an integer",
    "uint32": "{field} must be an unsigned 32-bit integer",
    "person-name": "{field} must be a person name (letters, inner hyphens)",
    "org-name": "{field} must be an organization name (letters, digits, inner '-', '&', space)",
    "iso3166_1_alpha2": "{field} must be an ISO 3166-1 alpha-2 country code",
    "phone": "{field} must be digits with an optional leading '+'",
    "email": "{field} must be a valid email address",
    "before": "{field} must be in the past",
    "required_without_all": "{field} is required when {param} are all empty",
}

OMITEMPTY = "omitempty"


@lru_cache(maxsize=128)
def parse_rules(spec: str) -> tuple[tuple[str, str], ...]:
    """Split ``"required,min=1"`` into ``(("required", ""), ("min", "1"))``."""
    parsed: list[tuple[str, str]] = []
    for token in spec.split(","):
        token = token.strip()
        if not token:
            continue
        name, _, param = token.partition("=")
        parsed.append((name.strip(), param.strip()))
    return tuple(parsed)


def _utcnow() -> datetime:
    return datetime.now(UTC)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class Validator:
    """Evaluates field bindings against model instances.

    Args:
        bindings: Per-model field rule specs. Defaults to :data:`FIELD_RULES`.
        clock: Returns the evaluation time for the ``before`` rule.
    """

    def __init__(
        self,
        *,
        bindings: Mapping[type[BaseModel], Mapping[str, str]] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._rules: dict[str, RuleFunc] = dict(DEFAULT_RULES)
        self._messages: dict[str, str] = dict(_MESSAGES)
        self._bindings = {k: dict(v) for k, v in (bindings or FIELD_RULES).items()}
        self._clock = clock or _utcnow

    def register_rule(self, name: str, func: RuleFunc, message: str | None = None) -> None:
        """Add or replace a named rule predicate."""
        self._rules[name] = func
        if message is not None:
            self._messages[name] = message

    def has_bindings(self, model: type) -> bool:
        return model in self._bindings

    def validate(self, obj: Any, *, root: str = "") -> ValidationResult:
        """Validate *obj* and every nested bound model.

        Args:
            obj: A bound model instance. None counts as a missing value.
            root: Path prefix for reported fields (e.g. ``"info"``).

        Raises:
            TypeError: *obj* has no registered bindings.
        """
        violations: list[FieldViolation] = []
        if obj is None:
            name = root or "value"
            violations.append(self._violation(name, "required", ""))
            return ValidationResult(violations)
        if type(obj) not in self._bindings:
            msg = f"No validation rules registered for {type(obj).__name__}"
            raise TypeError(msg)
        self._walk(obj, root, self._clock(), violations)
        return ValidationResult(violations)

    def validate_value(self, value: Any, rules: str, *, field: str = "value") -> ValidationResult:
        """Validate a single standalone value against a rule spec."""
        violations: list[FieldViolation] = []
        self._check(value, rules, field, RuleContext(parent=None, now=self._clock()), violations)
        return ValidationResult(violations)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _walk(self, obj: BaseModel, prefix: str, now: datetime, out: list[FieldViolation]) -> None:
        ctx = RuleContext(parent=obj, now=now)
        for name, spec in self._bindings[type(obj)].items():
            value = getattr(obj, name, None)
            path = f"{prefix}.{name}" if prefix else name
            self._check(value, spec, path, ctx, out)
            self._descend(value, path, now, out)

    def _descend(self, value: Any, path: str, now: datetime, out: list[FieldViolation]) -> None:
        if isinstance(value, BaseModel) and type(value) in self._bindings:
            self._walk(value, path, now, out)
        elif isinstance(value, (list, tuple)):
            for index, item in enumerate(value):
                self._descend(item, f"{path}[{index}]", now, out)

    def _check(
        self,
        value: Any,
        spec: str,
        path: str,
        ctx: RuleContext,
        out: list[FieldViolation],
    ) -> None:
        for name, param in parse_rules(spec):
            if name == OMITEMPTY:
                if _is_zero(value):
                    return
                continue
            func = self._rules.get(name)
            if func is None:
                msg = f"Unknown validation rule: {name!r}"
                raise ValueError(msg)
            if not func(value, param, ctx):
                out.append(self._violation(path, name, param))
                return

    def _violation(self, path: str, rule: str, param: str) -> FieldViolation:
        template = self._messages.get(rule, "{field} failed on the '{rule}' rule")
        return FieldViolation(
            field=path,
            rule=rule,
            message=template.format(field=path, rule=rule, param=param),
            param=param,
        )
