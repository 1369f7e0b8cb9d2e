"""An adaptor between callbacks and futures

Lots of APIs report completion by calling a callback, possibly from some other
thread. Coroutine code would much rather `await` a value. This package bridges
the two:

```
def loader(complete):
    # start the operation, and arrange for `complete` to be called with the result
    client.get_cb(key, complete)

value = await CallbackFuture(loader)
```

The bridge is poll-based, in the style of Rust futures: a future has a `poll`
method taking a `Waker`, and returns either `Ready(value)` or `Pending`. When
it returns `Pending`, it has kept hold of the waker, and signals it once
polling again could make progress. That's the only contact a future has with
whatever is driving it, so the same future can be:

- awaited under trio or asyncio (`callback_future.runners`),
- driven on a plain thread with `block_on` (`callback_future.executor`),
- combined with others using `join` (`callback_future.join`).

The loader runs on first poll, not at construction. The completion callback
may be called on the loader's stack, before it returns, or from any thread at
any later time; the value is handed over through a lock-guarded slot.

A CallbackFuture produces one value, once. There's no cancellation of the
wrapped operation: if the consumer stops waiting, a later completion is simply
dropped. There's no error channel either; complete with an `outcome.Outcome`
if the operation can fail (`callback_future.outcome`).

"""
from callback_future.poll import Ready, Pending, Poll, Waker, Future
from callback_future.core import CallbackFuture, Completion, State
from callback_future.join import join
from callback_future.executor import block_on, ThreadWaker
from callback_future.runners import wait
