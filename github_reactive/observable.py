"""
Cold, push-based streams on top of asyncio.

An Observable describes how to produce values; nothing runs until it is
subscribed to or iterated, and every subscription runs the producer again.
Values are delivered either by callbacks (``subscribe``) or pulled with
``async for``. A stream ends with exactly one completion or one error.
"""

import asyncio
import inspect
from typing import (
    Any,
    AsyncIterable,
    AsyncIterator,
    Awaitable,
    Callable,
    Generator,
    Generic,
    List,
    Optional,
    TypeVar,
)

from shared.errors import EmptySequenceError
from shared.logging import get_logger

T = TypeVar("T")
R = TypeVar("R")

logger = get_logger("github_reactive.observable")


async def _invoke(callback: Callable[..., Any], *args: Any) -> None:
    result = callback(*args)
    if inspect.isawaitable(result):
        await result


class Subscription:
    """Handle on a running subscription."""

    def __init__(self, task: "asyncio.Task[None]"):
        self._task = task

    @property
    def closed(self) -> bool:
        """True once the stream finished, failed or was disposed."""
        return self._task.done()

    def dispose(self) -> None:
        """Stop delivery; no callback runs after this returns control to the loop."""
        if not self._task.done():
            self._task.cancel()

    async def wait(self) -> None:
        """Wait until delivery ends, re-raising an error no handler consumed."""
        await asyncio.wait([self._task])
        if self._task.cancelled():
            return
        error = self._task.exception()
        if error is not None:
            raise error

    def __await__(self) -> Generator[Any, None, None]:
        return self.wait().__await__()


class Observable(Generic[T]):
    """A cold stream of values of type T."""

    def __init__(self, factory: Callable[[], AsyncIterator[T]]):
        self._factory = factory

    @classmethod
    def from_awaitable(cls, factory: Callable[[], Awaitable[T]]) -> "Observable[T]":
        """Single-value stream; factory is called once per subscription."""
        async def source() -> AsyncIterator[T]:
            yield await factory()

        return cls(source)

    @classmethod
    def from_async_iterable(cls, factory: Callable[[], AsyncIterable[T]]) -> "Observable[T]":
        return cls(lambda: factory().__aiter__())

    @classmethod
    def empty(cls) -> "Observable[T]":
        async def source() -> AsyncIterator[T]:
            return
            yield  # pragma: no cover

        return cls(source)

    @classmethod
    def throw(cls, error: BaseException) -> "Observable[T]":
        async def source() -> AsyncIterator[T]:
            raise error
            yield  # pragma: no cover

        return cls(source)

    def __aiter__(self) -> AsyncIterator[T]:
        return self._factory().__aiter__()

    def subscribe(self,
                  on_next: Optional[Callable[[T], Any]] = None,
                  on_error: Optional[Callable[[BaseException], Any]] = None,
                  on_completed: Optional[Callable[[], Any]] = None) -> Subscription:
        """Start delivering values on the running event loop.

        Callbacks may be plain functions or coroutine functions. Without an
        ``on_error`` handler the error is logged and raised from awaiting the
        returned Subscription. An exception raised by ``on_next`` itself ends
        the subscription without calling ``on_error`` or ``on_completed`` and
        is raised from awaiting the Subscription.
        """
        loop = asyncio.get_running_loop()
        task = loop.create_task(self._deliver(on_next, on_error, on_completed))
        return Subscription(task)

    async def _deliver(self,
                       on_next: Optional[Callable[[T], Any]],
                       on_error: Optional[Callable[[BaseException], Any]],
                       on_completed: Optional[Callable[[], Any]]) -> None:
        iterator = self.__aiter__()
        try:
            while True:
                try:
                    item = await iterator.__anext__()
                except StopAsyncIteration:
                    break
                except Exception as e:
                    if on_error is None:
                        logger.error("Unhandled observable error", error=str(e), error_type=type(e).__name__)
                        raise
                    await _invoke(on_error, e)
                    return

                if on_next is not None:
                    await _invoke(on_next, item)
        finally:
            aclose = getattr(iterator, "aclose", None)
            if aclose is not None:
                await aclose()

        if on_completed is not None:
            await _invoke(on_completed)

    def map(self, selector: Callable[[T], R]) -> "Observable[R]":
        """Stream of selector(value) for every value."""
        async def source() -> AsyncIterator[R]:
            async for item in self:
                yield selector(item)

        return Observable(source)

    async def to_list(self) -> List[T]:
        return [item async for item in self]

    async def first(self) -> T:
        """First value; the rest of the stream is not consumed."""
        iterator = self.__aiter__()
        try:
            return await iterator.__anext__()
        except StopAsyncIteration:
            raise EmptySequenceError() from None
        finally:
            aclose = getattr(iterator, "aclose", None)
            if aclose is not None:
                await aclose()

    async def last(self) -> T:
        sentinel = object()
        value: Any = sentinel
        async for item in self:
            value = item
        if value is sentinel:
            raise EmptySequenceError()
        return value

    def __await__(self) -> Generator[Any, None, T]:
        return self.last().__await__()
