"""Driving a future to completion by blocking the calling thread

This is the simplest scheduler there is: poll, and if the future isn't ready,
sleep on an Event until the waker is signaled, then poll again. It's useful
from synchronous code, and in tests.

"""
from __future__ import annotations
from callback_future.poll import Future, Waker, Ready
import logging
import threading
import time
import typing as t

__all__ = [
    'ThreadWaker',
    'block_on',
]

logger = logging.getLogger(__name__)

T = t.TypeVar('T')

class ThreadWaker(Waker):
    "Wakes a thread sleeping in `wait`"
    def __init__(self) -> None:
        self._event = threading.Event()

    def wake(self) -> None:
        self._event.set()

    def clear(self) -> None:
        self._event.clear()

    def wait(self, timeout: t.Optional[float]=None) -> bool:
        return self._event.wait(timeout)

def block_on(future: Future[T], timeout: t.Optional[float]=None) -> T:
    """Poll `future` on this thread until it's ready, and return its value

    If `timeout` is passed and that many seconds pass without the future
    becoming ready, raises TimeoutError. That only abandons the wait; whatever
    operation is behind the future keeps going.

    """
    waker = ThreadWaker()
    deadline = None if timeout is None else time.monotonic() + timeout
    while True:
        # clear before polling, so a wake that arrives during the poll isn't lost
        waker.clear()
        polled = future.poll(waker)
        if isinstance(polled, Ready):
            return polled.value
        if deadline is None:
            waker.wait()
        else:
            remaining = deadline - time.monotonic()
            if remaining <= 0 or not waker.wait(remaining):
                logger.debug("block_on(%s): timed out after %s seconds", future, timeout)
                raise TimeoutError(f"{future!r} not ready after {timeout} seconds")
