"""
Workflow step helpers: step tagging and cooperative cancellation.

Callers cancel a workflow by setting an asyncio.Event passed as
cancel_event. The event is checked before every step, and in-flight
requests and sleeps race against it.
"""

import asyncio
import logging
from contextlib import contextmanager
from typing import Awaitable, Iterator, Optional, TypeVar

import httpx

from ..exceptions import OperationCancelledError, PogodocError, ServiceError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def check_cancelled(cancel_event: Optional[asyncio.Event], step: str) -> None:
    """Raise OperationCancelledError if cancel_event is set."""
    if cancel_event is not None and cancel_event.is_set():
        logger.info(f"Cancelled before step '{step}'")
        raise OperationCancelledError(step)


@contextmanager
def workflow_step(step: str, cancel_event: Optional[asyncio.Event] = None) -> Iterator[None]:
    """
    Run a block as a named workflow step.

    Refuses to start if cancel_event is already set. SDK errors raised
    inside the block are tagged with the step name; stray httpx errors
    are wrapped into ServiceError.
    """
    check_cancelled(cancel_event, step)
    try:
        yield
    except OperationCancelledError:
        raise
    except PogodocError as e:
        e.tag_step(step)
        raise
    except httpx.HTTPError as e:
        error = ServiceError(str(e))
        error.tag_step(step)
        raise error from e


async def run_cancellable(
    awaitable: Awaitable[T],
    cancel_event: Optional[asyncio.Event],
    step: str,
) -> T:
    """
    Await awaitable unless cancel_event fires first.

    When the event wins, the pending operation is cancelled and
    OperationCancelledError is raised.
    """
    if cancel_event is None:
        return await awaitable

    if cancel_event.is_set():
        if asyncio.iscoroutine(awaitable):
            awaitable.close()
        check_cancelled(cancel_event, step)

    operation = asyncio.ensure_future(awaitable)
    waiter = asyncio.ensure_future(cancel_event.wait())
    try:
        done, _ = await asyncio.wait(
            {operation, waiter}, return_when=asyncio.FIRST_COMPLETED
        )
        if operation in done:
            return operation.result()

        logger.info(f"Cancelled during step '{step}'")
        raise OperationCancelledError(step)
    finally:
        for task in (operation, waiter):
            if not task.done():
                task.cancel()
        # Let cancelled tasks unwind before returning to the caller
        await asyncio.gather(operation, waiter, return_exceptions=True)


async def pause(
    delay: float,
    cancel_event: Optional[asyncio.Event] = None,
    step: str = "waiting",
) -> None:
    """Sleep for delay seconds, waking early with OperationCancelledError on cancel."""
    if cancel_event is None:
        await asyncio.sleep(delay)
        return

    check_cancelled(cancel_event, step)
    try:
        await asyncio.wait_for(cancel_event.wait(), timeout=delay)
    except asyncio.TimeoutError:
        return
    raise OperationCancelledError(step)
