"""Customer aggregate — info variants, owned sub-records, invariants.

``CustomerInfo`` is a tagged union over :class:`PersonInfo` and
:class:`OrganizationInfo`, discriminated by the ``kind`` field.  Models
here carry types only; field rules live in
:mod:`custreg.domain.validation` so that an invalid value can still be
constructed, inspected, and reported on.

INVARIANT: a customer's info kind never changes after creation.
"""

from __future__ import annotations

import random
import time
from datetime import date
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from custreg.domain.types import CustomerType, State

UINT32_MAX = 2**32 - 1


class CustomerDomainError(Exception):
    """Base exception for customer domain errors."""


class InvalidInputError(CustomerDomainError):
    """Raised when a domain constructor receives an absent or unusable value."""


class TypeMismatchError(CustomerDomainError):
    """Raised when an info update supplies the other customer kind."""

    def __init__(self, current: CustomerType, attempted: CustomerType) -> None:
        super().__init__(
            f"Customer type not equal: stored {current.name}, got {attempted.name}"
        )
        self.current = current
        self.attempted = attempted


# ---------------------------------------------------------------------------
# Info variants
# ---------------------------------------------------------------------------


class PersonInfo(BaseModel):
    """Master data of a private customer."""

    model_config = {"frozen": True}

    kind: Literal["private"] = "private"
    given_name: str = ""
    family_name: str = ""
    ssn: str = ""
    date_of_birth: date | None = None
    citizenship: str = ""

    def type(self) -> CustomerType:
        return CustomerType.PRIVATE


class OrganizationInfo(BaseModel):
    """Master data of an organization customer."""

    model_config = {"frozen": True}

    kind: Literal["organization"] = "organization"
    name: str = ""
    form: str = ""
    legal_id: str = ""
    registration_date: date | None = None
    registration_country: str = ""

    def type(self) -> CustomerType:
        return CustomerType.ORGANIZATION


CustomerInfo = Annotated[PersonInfo | OrganizationInfo, Field(discriminator="kind")]


# ---------------------------------------------------------------------------
# Owned sub-records
# ---------------------------------------------------------------------------


class Address(BaseModel):
    """Postal address."""

    model_config = {"frozen": True}

    label: str = ""
    street: str = ""
    postal_code: str = ""
    city: str = ""
    country: str = ""


class ContactInfo(BaseModel):
    """Phone, mobile and email channels; at least one must be present."""

    model_config = {"frozen": True}

    phone: str = ""
    mobile: str = ""
    email: str = ""


class TaxInfo(BaseModel):
    """Tax registration in one country."""

    model_config = {"frozen": True}

    country: str = ""
    tax_id: str = ""


# ---------------------------------------------------------------------------
# Aggregate root
# ---------------------------------------------------------------------------


class Customer(BaseModel):
    """Aggregate root owning the info variant and all sub-records.

    Attributes:
        id: Unsigned 32-bit identifier, never zero once stored.
        state: Lifecycle state, ``PROSPECT`` on creation.
        info: Exactly one info variant; its kind is fixed for life.
        addresses: Zero or more postal addresses.
        contacts: Zero or more contact channels.
        tax_infos: Zero or more tax registrations.
    """

    id: int
    state: State = State.PROSPECT
    info: CustomerInfo
    addresses: list[Address] = Field(default_factory=list)
    contacts: list[ContactInfo] = Field(default_factory=list)
    tax_infos: list[TaxInfo] = Field(default_factory=list)

    def type(self) -> CustomerType:
        return self.info.type()

    def update_info(self, info: PersonInfo | OrganizationInfo) -> None:
        """Replace the info variant, keeping the customer kind.

        Raises:
            TypeMismatchError: *info* is of the other kind.  The customer
                is left untouched.
            InvalidInputError: *info* is None.
        """
        if info is None:
            raise InvalidInputError("Customer info is required")
        if info.type() != self.type():
            raise TypeMismatchError(self.type(), info.type())
        self.info = info

    def set_state(self, state: State | int) -> None:
        self.state = State(state)

    def add_address(self, address: Address) -> None:
        self.addresses = [*self.addresses, address]

    def add_contact(self, contact: ContactInfo) -> None:
        self.contacts = [*self.contacts, contact]

    def add_tax_info(self, tax_info: TaxInfo) -> None:
        self.tax_infos = [*self.tax_infos, tax_info]


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def new_random_id(rng: random.Random | None = None) -> int:
    """Return a pseudo-random non-zero unsigned 32-bit ID.

    Without *rng* a fresh generator seeded from the wall clock is used.
    Not collision free: the repository's insert rejects duplicates.
    """
    if rng is None:
        rng = random.Random(time.time_ns())
    value = 0
    while value == 0:
        value = rng.getrandbits(32)
    return value


def new_customer(customer_id: int, info: PersonInfo | OrganizationInfo | None) -> Customer:
    """Create a customer in state ``PROSPECT``.

    Raises:
        InvalidInputError: *info* is None.
    """
    if info is None:
        raise InvalidInputError("Customer info is required")
    return Customer(id=customer_id, state=State.PROSPECT, info=info)


def new_customer_with_random_id(
    info: PersonInfo | OrganizationInfo | None,
    rng: random.Random | None = None,
) -> Customer:
    return new_customer(new_random_id(rng), info)
