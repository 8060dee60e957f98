"""Customer classification and lifecycle enums.

Values are stable integers; they are what the transport layer puts on
the wire and what the ``min``/``max`` validation rules compare against.
"""

from __future__ import annotations

from enum import IntEnum


class CustomerType(IntEnum):
    """Discriminant of a customer info variant."""

    PRIVATE = 1
    ORGANIZATION = 2


class State(IntEnum):
    """Customer lifecycle state."""

    PROSPECT = 1
    ACTIVE = 2
    PASSIVE = 3


STATE_MIN = min(State)
STATE_MAX = max(State)
