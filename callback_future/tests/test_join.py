from callback_future import CallbackFuture, Ready, Pending, join, block_on
from callback_future.tests.test_core import RecordingWaker
from callback_future.tests.test_executor import in_thread
import typing as t
import unittest

def hello_world_futures() -> t.List[CallbackFuture[str]]:
    return [
        CallbackFuture(lambda complete: complete("Hello")),
        CallbackFuture.ready(", "),
        CallbackFuture(in_thread("world!")),
    ]

class TestJoin(unittest.TestCase):
    def test_join(self) -> None:
        r1, r2, r3 = block_on(join(*hello_world_futures()), timeout=5)
        self.assertEqual("".join([r1, r2, r3]), "Hello, world!")

    def test_positional_order(self) -> None:
        # the first future finishes last
        results = block_on(join(
            CallbackFuture(in_thread("a", delay=0.1)),
            CallbackFuture(in_thread("b")),
            CallbackFuture.ready("c"),
        ), timeout=5)
        self.assertEqual(results, ("a", "b", "c"))

    def test_empty(self) -> None:
        self.assertEqual(join().poll(RecordingWaker()), Ready(()))

    def test_finished_children_not_repolled(self) -> None:
        callbacks: t.List[t.Callable[[int], None]] = []
        waker = RecordingWaker()
        joined = join(CallbackFuture.ready(1), CallbackFuture(callbacks.append))
        self.assertIs(joined.poll(waker), Pending)
        # a consumed CallbackFuture would stay Pending forever if it were polled again
        self.assertIs(joined.poll(waker), Pending)
        callbacks[0](2)
        self.assertEqual(waker.wakes, 1)
        self.assertEqual(joined.poll(waker), Ready((1, 2)))

    def test_single(self) -> None:
        self.assertEqual(join(CallbackFuture.ready(1)).poll(RecordingWaker()), Ready((1,)))
