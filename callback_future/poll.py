"""The poll protocol shared by everything in this package

A future here is anything with a `poll` method. The driving scheduler calls
`poll` with a `Waker`; the future either returns `Ready(value)`, which is
terminal, or returns `Pending`, in which case it has arranged for the waker to
be signaled when polling again might make progress.

This is deliberately the smallest surface a scheduler needs. The waker is the
only piece of a runner's suspension mechanism a future ever sees, so the same
future can be driven by `block_on` on a plain thread, or awaited under trio or
asyncio, see `callback_future.runners`.

"""
from __future__ import annotations
from dataclasses import dataclass
import abc
import typing as t

__all__ = [
    'Ready',
    'Pending',
    'PendingType',
    'Poll',
    'Waker',
    'Future',
]

T = t.TypeVar('T')

@dataclass(frozen=True)
class Ready(t.Generic[T]):
    "The future has produced its value; this is terminal"
    __slots__ = ('value',)
    value: T

class PendingType:
    "The future isn't ready; the waker passed to `poll` will be signaled"
    __slots__ = ()
    _instance: t.Optional[PendingType] = None

    def __new__(cls) -> PendingType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'Pending'

    def __bool__(self) -> bool:
        return False

Pending = PendingType()

Poll = t.Union[Ready[T], PendingType]

class Waker:
    """A handle the scheduler hands to `poll`, to be signaled when it should poll again

    `wake` may be called from any thread, any number of times; extra wakes
    only cause extra polls. A future which wants to keep the handle past the
    end of `poll` should keep `clone()` rather than the original.

    """
    @abc.abstractmethod
    def wake(self) -> None: ...

    def clone(self) -> Waker:
        return self

class Future(t.Generic[T]):
    "Something which can be polled to completion, and awaited under trio or asyncio"
    @abc.abstractmethod
    def poll(self, waker: Waker) -> Poll[T]: ...

    def __await__(self) -> t.Generator[t.Any, None, T]:
        # runners imports this module, so it can't be imported at the top
        from callback_future.runners import wait
        return wait(self).__await__()
