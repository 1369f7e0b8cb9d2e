"""Awaiting pollable futures under trio or asyncio

`wait` works out which coroutine runner we're under, makes a waker which
knows how to get the current task rescheduled on that runner, and then polls
the future, parking the task between polls.

Both wakers may be signaled from any thread. Both defer the actual
rescheduling onto the runner's own thread, so a wake which happens before the
task has parked (for example, a completion callback called synchronously from
inside `poll`) is only acted on once the task has parked. Duplicate and
spurious wakes are harmless; they only cause an extra poll.

If the awaiting task is cancelled, we stop waiting, but the operation behind
the future is not told. If it completes later, perhaps after the runner has
exited entirely, the wake is dropped with a debug log.

"""
from __future__ import annotations
from callback_future.poll import Future, Waker, Ready
import asyncio
import enum
import logging
import trio
import typing as t

__all__ = [
    'Runner',
    'current_runner',
    'TrioWaker',
    'AsyncioWaker',
    'wait',
]

logger = logging.getLogger(__name__)

T = t.TypeVar('T')

class Runner(enum.Enum):
    TRIO = "trio"
    ASYNCIO = "asyncio"

def current_runner() -> Runner:
    "Return the coroutine runner we're currently running under"
    try:
        trio.lowlevel.current_task()
    except RuntimeError:
        pass
    else:
        return Runner.TRIO
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        pass
    else:
        return Runner.ASYNCIO
    raise RuntimeError("awaiting under unsupported coroutine runner")

#### trio
TrioTask = t.Any
"trio doesn't expose the type of Task publicly..."

class TrioWaker(Waker):
    "Reschedules a trio task parked in `wait_task_rescheduled`"
    def __init__(self, task: TrioTask, token: trio.lowlevel.TrioToken) -> None:
        self.task = task
        self.token = token
        # only touched from the trio thread
        self.parked = False

    def wake(self) -> None:
        try:
            self.token.run_sync_soon(self._reschedule)
        except trio.RunFinishedError:
            logger.debug("TrioWaker(%s): woken after trio run finished, dropping", self.task)

    def _reschedule(self) -> None:
        if not self.parked:
            logger.debug("TrioWaker(%s): woken while not parked", self.task)
            return
        self.parked = False
        trio.lowlevel.reschedule(self.task)

    def _abort(self, raise_cancel: t.Any) -> trio.lowlevel.Abort:
        logger.debug("TrioWaker(%s): cancelled", self.task)
        self.parked = False
        return trio.lowlevel.Abort.SUCCEEDED

async def _wait_trio(future: Future[T]) -> T:
    waker = TrioWaker(trio.lowlevel.current_task(), trio.lowlevel.current_trio_token())
    while True:
        polled = future.poll(waker)
        if isinstance(polled, Ready):
            return polled.value
        waker.parked = True
        await trio.lowlevel.wait_task_rescheduled(waker._abort)

#### asyncio
class AsyncioWaker(Waker):
    "Resolves the asyncio future a task is currently awaiting"
    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self.loop = loop
        # only touched from the loop thread
        self.waiter: t.Optional[asyncio.Future[None]] = None

    def wake(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self._resolve)
        except RuntimeError:
            # the loop is closed
            logger.debug("AsyncioWaker(%s): woken after loop closed, dropping", self.loop)

    def _resolve(self) -> None:
        if self.waiter is None or self.waiter.done():
            logger.debug("AsyncioWaker(%s): woken while not parked", self.loop)
            return
        self.waiter.set_result(None)

async def _wait_asyncio(future: Future[T]) -> T:
    loop = asyncio.get_running_loop()
    waker = AsyncioWaker(loop)
    while True:
        polled = future.poll(waker)
        if isinstance(polled, Ready):
            return polled.value
        waker.waiter = loop.create_future()
        try:
            await waker.waiter
        finally:
            waker.waiter = None

async def wait(future: Future[T]) -> T:
    "Poll `future` to completion under the current coroutine runner"
    runner = current_runner()
    if runner == Runner.TRIO:
        return await _wait_trio(future)
    else:
        return await _wait_asyncio(future)
