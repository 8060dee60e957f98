"""In-memory CustomerRepository guarded by one table-wide RW lock.

Stored records are private deep copies that are replaced, never
mutated, so ``get`` can release the lock before copying and ``insert``
/ ``update`` copy before taking it.  Lock hold time is one dict lookup
or assignment.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from custreg.domain.customer import Customer
from custreg.infrastructure.context import CallContext
from custreg.infrastructure.locking import ReadWriteLock
from custreg.infrastructure.repository import (
    CustomerAlreadyExistsError,
    CustomerNotFoundError,
    CustomerRepository,
    RepositoryTimeoutError,
)

logger = logging.getLogger(__name__)

DEFAULT_LOCK_TIMEOUT = 5.0


class InMemoryCustomerRepository(CustomerRepository):
    """Reference repository keeping records in a dict.

    Args:
        seed: Records to preload; duplicate IDs raise
            :class:`CustomerAlreadyExistsError`.
        lock_timeout: Upper bound in seconds on any lock wait.
    """

    def __init__(
        self,
        seed: Iterable[Customer] | None = None,
        *,
        lock_timeout: float = DEFAULT_LOCK_TIMEOUT,
    ) -> None:
        self._lock = ReadWriteLock()
        self._data: dict[int, Customer] = {}
        self._lock_timeout = lock_timeout
        for customer in seed or ():
            self.insert(customer)

    # ------------------------------------------------------------------
    # CustomerRepository
    # ------------------------------------------------------------------

    def get(self, customer_id: int, ctx: CallContext | None = None) -> Customer:
        timeout = self._wait_budget(ctx)
        try:
            with self._lock.read_locked(timeout):
                stored = self._data.get(customer_id)
        except TimeoutError as exc:
            raise RepositoryTimeoutError(f"Read of customer {customer_id} timed out") from exc
        if stored is None:
            raise CustomerNotFoundError(customer_id)
        return stored.model_copy(deep=True)

    def insert(self, customer: Customer, ctx: CallContext | None = None) -> None:
        record = customer.model_copy(deep=True)
        timeout = self._wait_budget(ctx)
        try:
            with self._lock.write_locked(timeout):
                if record.id in self._data:
                    raise CustomerAlreadyExistsError(record.id)
                self._data[record.id] = record
        except TimeoutError as exc:
            raise RepositoryTimeoutError(f"Insert of customer {record.id} timed out") from exc
        logger.debug("Inserted customer %s", record.id)

    def update(self, customer: Customer, ctx: CallContext | None = None) -> None:
        record = customer.model_copy(deep=True)
        timeout = self._wait_budget(ctx)
        try:
            with self._lock.write_locked(timeout):
                if record.id not in self._data:
                    raise CustomerNotFoundError(record.id)
                self._data[record.id] = record
        except TimeoutError as exc:
            raise RepositoryTimeoutError(f"Update of customer {record.id} timed out") from exc
        logger.debug("Updated customer %s", record.id)

    def count(self) -> int:
        with self._lock.read_locked(self._lock_timeout):
            return len(self._data)

    def ids(self) -> list[int]:
        with self._lock.read_locked(self._lock_timeout):
            return sorted(self._data)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _wait_budget(self, ctx: CallContext | None) -> float:
        """Check *ctx* and return how long a lock wait may take."""
        if ctx is None:
            return self._lock_timeout
        ctx.check()
        remaining = ctx.remaining()
        if remaining is None:
            return self._lock_timeout
        return min(remaining, self._lock_timeout)
