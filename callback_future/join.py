"Waiting on several futures at once"
from __future__ import annotations
from callback_future.poll import Future, Waker, Poll, Ready, Pending
import logging
import typing as t

__all__ = [
    'Join',
    'join',
]

logger = logging.getLogger(__name__)

A = t.TypeVar('A')
B = t.TypeVar('B')
C = t.TypeVar('C')

class _NotDone:
    __slots__ = ()

_NOT_DONE = _NotDone()

class Join(Future[t.Tuple[t.Any, ...]]):
    """A future of the results of several futures, in the order they were passed

    Every poll polls each child which hasn't finished yet, all with the same
    waker, so a completion of any of them gets us polled again. A child that
    has produced its value is never polled again.

    """
    def __init__(self, futures: t.Sequence[Future[t.Any]]) -> None:
        self._futures = list(futures)
        self._results: t.List[t.Any] = [_NOT_DONE]*len(self._futures)

    def poll(self, waker: Waker) -> Poll[t.Tuple[t.Any, ...]]:
        for i, future in enumerate(self._futures):
            if self._results[i] is _NOT_DONE:
                polled = future.poll(waker)
                if isinstance(polled, Ready):
                    logger.debug("Join: future %d of %d is ready", i, len(self._futures))
                    self._results[i] = polled.value
        if any(result is _NOT_DONE for result in self._results):
            return Pending
        return Ready(tuple(self._results))

@t.overload
def join(a: Future[A]) -> Future[t.Tuple[A]]: ...
@t.overload
def join(a: Future[A], b: Future[B]) -> Future[t.Tuple[A, B]]: ...
@t.overload
def join(a: Future[A], b: Future[B], c: Future[C]) -> Future[t.Tuple[A, B, C]]: ...
@t.overload
def join(*futures: Future[t.Any]) -> Future[t.Tuple[t.Any, ...]]: ...
def join(*futures: Future[t.Any]) -> Future[t.Tuple[t.Any, ...]]:
    "Wait for all the futures passed to it, and return all the results, in the same order."
    return Join(futures)
