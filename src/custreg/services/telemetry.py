"""Per-call stage timing for registry operations.

Off by default; a disabled check costs one ContextVar read.  With
``--verbose`` every ``@traced`` service call records a root span named
after the method, plus one child per pipeline stage opened with
:func:`trace_span` (``validate``, ``load``, ``store``).  The finished tree
lands in ``ServiceResult.meta["telemetry"]`` and is logged as a
``span.complete`` debug event.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from custreg.services.result import ServiceResult

log = structlog.get_logger("custreg.telemetry")

_enabled: ContextVar[bool] = ContextVar("custreg_telemetry", default=False)
_active: ContextVar[Span | None] = ContextVar("custreg_active_span", default=None)


@dataclass
class Span:
    """One timed stage; ``status`` is set when the stage finishes."""

    name: str
    children: list[Span] = field(default_factory=list)
    attrs: dict[str, Any] = field(default_factory=dict)
    status: str = "open"
    started_ns: int = field(default_factory=time.perf_counter_ns)
    ended_ns: int | None = None

    @property
    def duration_ms(self) -> float:
        if self.ended_ns is None:
            return 0.0
        return (self.ended_ns - self.started_ns) / 1_000_000

    def annotate(self, **attrs: Any) -> None:
        self.attrs.update(attrs)

    def finish(self, status: str = "ok") -> None:
        self.ended_ns = time.perf_counter_ns()
        self.status = status

    def to_dict(self) -> dict[str, Any]:
        node: dict[str, Any] = {
            "name": self.name,
            "status": self.status,
            "duration_ms": round(self.duration_ms, 3),
        }
        if self.attrs:
            node["attrs"] = dict(self.attrs)
        if self.children:
            node["stages"] = [child.to_dict() for child in self.children]
        return node


@contextmanager
def _activate(span: Span) -> Iterator[Span]:
    token = _active.set(span)
    try:
        yield span
    except BaseException:
        span.finish("raised")
        raise
    finally:
        _active.reset(token)
        if span.ended_ns is None:
            span.finish()


@contextmanager
def trace_span(name: str, **attrs: Any) -> Iterator[Span | None]:
    """Time a pipeline stage inside the current traced call.

    Yields None when telemetry is off or no traced call is running, so
    callers guard annotations with ``if span:``.
    """
    parent = _active.get() if _enabled.get() else None
    if parent is None:
        yield None
        return
    child = Span(name=name, attrs=dict(attrs))
    parent.children.append(child)
    with _activate(child):
        yield child


def _log_span(span: Span) -> None:
    log.debug(
        "span.complete",
        span_name=span.name,
        status=span.status,
        duration_ms=round(span.duration_ms, 3),
        stages=[child.name for child in span.children],
    )


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:
    """Record a root span for a service method and attach it to the result."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        root = Span(name=func.__qualname__)
        try:
            with _activate(root):
                result = func(*args, **kwargs)
        except BaseException:
            _log_span(root)
            raise

        if isinstance(result, ServiceResult):
            if result.error is not None:
                root.annotate(code=result.error.code.value)
                root.status = "failed"
            meta = {**(result.meta or {}), "telemetry": root.to_dict()}
            result = result.model_copy(update={"meta": meta})  # type: ignore[assignment]
        _log_span(root)
        return result

    return wrapper


def enable_telemetry() -> None:
    """Turn span recording on for the current context (``--verbose``)."""
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)
