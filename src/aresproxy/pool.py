r"""Thread-safe pool of reusable transport handles.

A transport handle is an ``httpx.Client`` (or any object with a
``close()`` method) that keeps its own connections alive between
requests. Handles are created lazily, reused last-in first-out so that
the warmest connection is picked first, and never destroyed while idle
until the pool is closed.

Example:
    ```pycon
    >>> from aresproxy.pool import TransportHandlePool
    >>> with TransportHandlePool() as pool:  # doctest: +SKIP
    ...     with pool.lease() as client:
    ...         response = client.get("https://api.example.com/data")
    ...

    ```
"""

from __future__ import annotations

__all__ = ["ConnectionLease", "TransportHandlePool"]

import logging
import threading
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType
    from typing import Self

logger: logging.Logger = logging.getLogger(__name__)


class ConnectionLease:
    r"""Exclusive, scoped checkout of one transport handle.

    The handle goes back to its pool exactly once, whether the lease is
    used as a context manager or released explicitly.

    Args:
        pool: The pool that owns the handle.
        handle: The leased handle.
    """

    def __init__(self, pool: TransportHandlePool, handle: Any) -> None:
        self._pool = pool
        self._handle = handle
        self._released = False

    @property
    def handle(self) -> Any:
        """The leased transport handle."""
        if self._released:
            msg = "the lease has already been released"
            raise RuntimeError(msg)
        return self._handle

    @property
    def released(self) -> bool:
        """``True`` once the handle has been returned to the pool."""
        return self._released

    def release(self) -> None:
        """Return the handle to the pool. Calling it again is a no-op."""
        if self._released:
            return
        self._released = True
        self._pool.release(self._handle)

    def __enter__(self) -> Any:
        return self.handle

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.release()


class TransportHandlePool:
    r"""Elastic LIFO pool of transport handles.

    The pool is unbounded: ``acquire`` never waits for another caller,
    it creates a new handle when none is idle. The internal lock only
    guards the idle list, so request I/O on leased handles runs fully in
    parallel.

    Handles that are still leased when the pool is closed are not
    reclaimed by ``close()``. Each of them is closed when its lease is
    released afterwards.

    Args:
        factory: Callable creating a new handle. Defaults to
            ``httpx.Client``.

    Example:
        ```pycon
        >>> from aresproxy.pool import TransportHandlePool
        >>> class Handle:
        ...     def close(self):
        ...         pass
        ...
        >>> pool = TransportHandlePool(factory=Handle)
        >>> lease = pool.acquire()
        >>> pool.outstanding_count
        1
        >>> lease.release()
        >>> pool.idle_count
        1
        >>> pool.close()

        ```
    """

    def __init__(self, factory: Callable[[], Any] | None = None) -> None:
        self._factory: Callable[[], Any] = factory or httpx.Client
        self._lock = threading.Lock()
        self._idle: list[Any] = []
        self._outstanding = 0
        self._created = 0
        self._closed = False

    @property
    def idle_count(self) -> int:
        """Number of handles waiting in the pool."""
        with self._lock:
            return len(self._idle)

    @property
    def outstanding_count(self) -> int:
        """Number of handles currently leased out."""
        with self._lock:
            return self._outstanding

    @property
    def created_count(self) -> int:
        """Number of handles created over the pool's lifetime."""
        with self._lock:
            return self._created

    @property
    def is_closed(self) -> bool:
        """``True`` once ``close()`` has been called."""
        with self._lock:
            return self._closed

    def acquire(self) -> ConnectionLease:
        """Lease a handle, reusing the most recently released one.

        Returns:
            A lease over an idle or newly created handle.

        Raises:
            RuntimeError: If the pool has been closed.
        """
        with self._lock:
            if self._closed:
                msg = "cannot acquire a transport handle from a closed pool"
                raise RuntimeError(msg)
            handle = self._idle.pop() if self._idle else None
            self._outstanding += 1
            if handle is None:
                self._created += 1

        if handle is None:
            try:
                handle = self._factory()
            except BaseException:
                with self._lock:
                    self._outstanding -= 1
                    self._created -= 1
                raise
            logger.debug(f"Created transport handle #{self.created_count}")
        return ConnectionLease(self, handle)

    lease = acquire

    def release(self, handle: Any) -> None:
        """Return a leased handle to the pool.

        Args:
            handle: The handle being returned.
        """
        with self._lock:
            self._outstanding -= 1
            if not self._closed:
                self._idle.append(handle)
                return
        logger.debug("Closing transport handle released after pool teardown")
        handle.close()

    def close(self) -> None:
        """Close every idle handle and refuse further acquisitions."""
        with self._lock:
            self._closed = True
            idle, self._idle = self._idle, []
            outstanding = self._outstanding
        for handle in idle:
            handle.close()
        if outstanding:
            logger.warning(
                f"Transport pool closed with {outstanding} handle(s) still leased; "
                "they will be closed when released"
            )

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
