"""Effects and drivers for the single evaluation core.

Evaluation is written once, as generators that *yield effects* instead of
calling user code directly:

    Call(func, args)    invoke a host function or filter
    Gather(tasks)       evaluate independent sibling subtrees

Two drivers interpret those effects:

    run_sync    performs calls inline and runs gathered tasks one after the
                other. An awaitable result cannot be waited for here, so it
                is closed and replaced by ``PENDING`` with a warning.
    run_async   awaits awaitable results and runs gathered tasks
                concurrently with ``asyncio.gather``. Results come back in
                task order, so output is assembled in document order
                regardless of completion order.

An exception raised by a call is thrown back into the generator at the
``yield``, so the evaluator decides whether it becomes a template error
(filters) or propagates unchanged (host functions).
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable, Generator, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Call:
    """Invoke ``func(*args)``; the result is sent back to the generator."""

    func: Callable[..., Any]
    args: tuple[Any, ...]


@dataclass(frozen=True, slots=True)
class Gather:
    """Run ``tasks`` (evaluation generators); a list of their results is sent back."""

    tasks: Sequence[Generator[Any, Any, Any]]


Effect = Call | Gather
Step = Generator[Effect, Any, T]


class _Pending:
    """Placeholder for an awaitable that the synchronous driver cannot wait for."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "PENDING"


PENDING = _Pending()


def _callable_name(func: Callable[..., Any]) -> str:
    return getattr(func, "__name__", None) or repr(func)


def _discard_awaitable(value: Any, func: Callable[..., Any]) -> _Pending:
    if inspect.iscoroutine(value):
        value.close()
    logger.warning(
        "%s returned an awaitable during synchronous compilation; "
        "use the async API to await it. Substituting a pending placeholder.",
        _callable_name(func),
    )
    return PENDING


def run_sync(step: Step[T]) -> T:
    """Drive an evaluation generator to completion without an event loop."""
    value: Any = None
    error: Exception | None = None
    while True:
        try:
            effect = step.send(value) if error is None else step.throw(error)
        except StopIteration as stop:
            return stop.value
        value, error = None, None

        if isinstance(effect, Call):
            try:
                value = effect.func(*effect.args)
            except Exception as exc:
                error = exc
                continue
            if inspect.isawaitable(value):
                value = _discard_awaitable(value, effect.func)
        else:
            try:
                value = [run_sync(task) for task in effect.tasks]
            except Exception as exc:
                error = exc


async def run_async(step: Step[T]) -> T:
    """Drive an evaluation generator, awaiting calls and gathering subtrees."""
    value: Any = None
    error: Exception | None = None
    while True:
        try:
            effect = step.send(value) if error is None else step.throw(error)
        except StopIteration as stop:
            return stop.value
        value, error = None, None

        try:
            if isinstance(effect, Call):
                value = effect.func(*effect.args)
                if inspect.isawaitable(value):
                    value = await value
            elif len(effect.tasks) == 1:
                value = [await run_async(effect.tasks[0])]
            else:
                value = list(await asyncio.gather(*(run_async(task) for task in effect.tasks)))
        except Exception as exc:
            error = exc


__all__ = ["PENDING", "Call", "Effect", "Gather", "Step", "run_async", "run_sync"]
