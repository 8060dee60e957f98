"""CustomerRepository — storage contract for customer records (port).

Any backend must make ``get``, ``insert`` and ``update`` appear atomic
to one another and must hand out copies, never references to its own
stored records.  The service layer depends only on this contract.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from custreg.domain.customer import Customer
    from custreg.infrastructure.context import CallContext


class RepositoryError(Exception):
    """Base exception for repository failures."""


class CustomerNotFoundError(RepositoryError):
    """Raised when no record exists for the requested ID."""

    def __init__(self, customer_id: int) -> None:
        super().__init__(f"Customer not found: {customer_id}")
        self.customer_id = customer_id


class CustomerAlreadyExistsError(RepositoryError):
    """Raised when inserting an ID that is already in use."""

    def __init__(self, customer_id: int) -> None:
        super().__init__(f"ID already in use: {customer_id}")
        self.customer_id = customer_id


class RepositoryTimeoutError(RepositoryError):
    """Raised when the store could not be accessed within the time allowed."""


class CustomerRepository(ABC):
    """Port for customer record storage."""

    @abstractmethod
    def get(self, customer_id: int, ctx: CallContext | None = None) -> Customer:
        """Return an independent copy of the stored record.

        Raises:
            CustomerNotFoundError: no record with *customer_id*.
        """

    @abstractmethod
    def insert(self, customer: Customer, ctx: CallContext | None = None) -> None:
        """Store a copy of a new record.

        Raises:
            CustomerAlreadyExistsError: the ID is taken; the stored record
                is left as it was.
        """

    @abstractmethod
    def update(self, customer: Customer, ctx: CallContext | None = None) -> None:
        """Overwrite an existing record with a copy of *customer*.

        Raises:
            CustomerNotFoundError: no record with ``customer.id``.
        """

    @abstractmethod
    def count(self) -> int:
        """Number of stored records."""

    @abstractmethod
    def ids(self) -> list[int]:
        """Stored IDs in ascending order."""
