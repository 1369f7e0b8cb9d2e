"""Carrying failure through a CallbackFuture with the outcome library

CallbackFuture has no error channel of its own. When the wrapped operation can
fail, complete with an `Outcome` and unwrap it on the other side:

```
def loader(complete):
    threading.Thread(target=capture_into, args=(complete, fetch, url)).start()
body = (await CallbackFuture(loader)).unwrap()
```

"""
from outcome import Outcome, Value, Error
import outcome
import typing as t

__all__ = [
    'Outcome',
    'Value',
    'Error',
    'capture_into',
]

T = t.TypeVar('T')

def capture_into(complete: t.Callable[[Outcome], None],
                 fn: t.Callable[..., T], *args: t.Any) -> None:
    "Call `fn(*args)` and pass the result, or the exception it raised, to `complete`"
    complete(outcome.capture(fn, *args))
