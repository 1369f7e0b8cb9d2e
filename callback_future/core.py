"""An adaptor between callbacks and futures

`CallbackFuture` wraps a "loader": a function which starts some asynchronous
operation and is passed a completion callback to call when that operation
finishes. The loader is called on the first `poll`, not at construction, so no
work starts until someone is actually waiting for the result.

```
fut = CallbackFuture(lambda complete: threading.Thread(target=complete, args=(42,)).start())
assert block_on(fut) == 42
```

The completion callback may be called on the loader's own stack, before the
loader returns, or later from any other thread. Either way the value lands in
a lock-guarded slot and the waker is signaled, and the next poll picks it up.

A CallbackFuture is single-shot. The completion callback should be called
once; if it's called again, the later value overwrites the earlier one. Once
`poll` has returned a value, the future is consumed and further polls return
`Pending` forever. There's no error channel: if the operation can fail, make
the value an `outcome.Outcome`, see `callback_future.outcome`.

"""
from __future__ import annotations
from dataclasses import dataclass
from callback_future.poll import Future, Waker, Poll, Ready, Pending
import enum
import logging
import threading
import typing as t

__all__ = [
    'CallbackFuture',
    'Completion',
    'Loader',
    'State',
]

logger = logging.getLogger(__name__)

T = t.TypeVar('T')

Loader = t.Callable[[t.Callable[[T], None]], None]
"Called once with a completion callback; starts the operation and returns immediately"

class State(enum.Enum):
    PENDING = "pending"
    AWAITING_CALLBACK = "awaiting_callback"
    FULFILLED = "fulfilled"
    CONSUMED = "consumed"

#### The one-shot loader
@dataclass
class NotYetRun(t.Generic[T]):
    __slots__ = ('loader',)
    loader: Loader[T]

class AlreadyRun:
    __slots__ = ()

    def __repr__(self) -> str:
        return 'AlreadyRun()'

ALREADY_RUN = AlreadyRun()

LoaderState = t.Union[NotYetRun[T], AlreadyRun]

#### The shared result slot
class ResultSlot(t.Generic[T]):
    """A lock-guarded optional value, plus the waker to signal when it's filled

    The completion callback puts into it and poll takes from it. Every poll
    which comes up empty registers its own waker, under the same lock, so a
    put always wakes whoever polled last, even if that isn't whoever polled
    first.

    We track fullness separately from the value so that None is a perfectly
    good result.

    """
    __slots__ = ('_lock', '_value', '_full', '_taken', '_waker')

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value: t.Optional[T] = None
        self._full = False
        self._taken = False
        self._waker: t.Optional[Waker] = None

    @classmethod
    def filled(cls, value: T) -> ResultSlot[T]:
        self = cls()
        self._value = value
        self._full = True
        return self

    def register(self, waker: Waker) -> None:
        with self._lock:
            self._waker = waker

    def put(self, value: T) -> t.Optional[Waker]:
        "Store `value`, and return the waker to signal"
        with self._lock:
            if self._full:
                logger.debug("ResultSlot: overwriting unconsumed value %r with %r", self._value, value)
            self._value = value
            self._full = True
            return self._waker

    def take(self, waker: Waker) -> t.Tuple[Poll[T], bool]:
        """Take the value if there is one; otherwise register `waker` to be signaled by the next put

        Also returns whether a value had already been taken, as of this same
        acquisition of the lock.

        """
        with self._lock:
            if not self._full:
                self._waker = waker.clone()
                return Pending, self._taken
            value = self._value
            self._value = None
            self._full = False
            self._taken = True
        return Ready(value), False

    def state(self) -> State:
        with self._lock:
            if self._full:
                return State.FULFILLED
            elif self._taken:
                return State.CONSUMED
            else:
                return State.AWAITING_CALLBACK

class Completion(t.Generic[T]):
    """The completion callback handed to a loader

    Calling it stores the value, then wakes the most recent poller, so that
    their next poll is guaranteed to see the value. It holds only the slot,
    not the CallbackFuture, so if the consumer has gone away, the store just
    goes into a slot nobody reads.

    """
    __slots__ = ('_slot',)

    def __init__(self, slot: ResultSlot[T]) -> None:
        self._slot = slot

    def __call__(self, value: T) -> None:
        logger.debug("Completion: completed with %r", value)
        waker = self._slot.put(value)
        if waker is not None:
            waker.wake()

class CallbackFuture(Future[T]):
    "A future whose value is delivered by a one-shot callback"
    def __init__(self, loader: Loader[T]) -> None:
        self._loader: LoaderState[T] = NotYetRun(loader)
        self._slot: ResultSlot[T] = ResultSlot()

    @classmethod
    def ready(cls, value: T) -> CallbackFuture[T]:
        "Make a CallbackFuture which yields `value` on its first poll"
        self = cls.__new__(cls)
        self._loader = ALREADY_RUN
        self._slot = ResultSlot.filled(value)
        return self

    @property
    def state(self) -> State:
        if isinstance(self._loader, NotYetRun):
            return State.PENDING
        return self._slot.state()

    def poll(self, waker: Waker) -> Poll[T]:
        loader, self._loader = self._loader, ALREADY_RUN
        if isinstance(loader, NotYetRun):
            # we haven't started yet; start the operation, and report Pending
            # even if it completed synchronously, since the waker will get us
            # polled again.
            logger.debug("CallbackFuture(%x): running loader %s", id(self), loader.loader)
            self._slot.register(waker.clone())
            loader.loader(Completion(self._slot))
            return Pending
        result, consumed = self._slot.take(waker)
        if consumed:
            logger.debug("CallbackFuture(%x): polled after its value was consumed", id(self))
        return result

    def __repr__(self) -> str:
        return f"CallbackFuture({self.state.name})"
