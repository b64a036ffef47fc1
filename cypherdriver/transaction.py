"""Explicit, retryable and auto-commit transactions."""

from __future__ import annotations

import contextlib
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Protocol

from cypherdriver.errors import UsageError
from cypherdriver.result import Result


@dataclass(frozen=True)
class Command:
    """A statement to run, with its parameters and fetch size."""

    cypher: str
    params: Mapping[str, Any] | None
    fetch_size: int


class TxConnection(Protocol):
    """What a transaction needs from its connection."""

    def run_tx(self, tx_handle: Any, command: Command) -> Any: ...

    def tx_commit(self, tx_handle: Any) -> None: ...

    def tx_rollback(self, tx_handle: Any) -> None: ...


def _run(conn: Any, tx_handle: Any, fetch_size: int, cypher: str,
         params: Mapping[str, Any] | None) -> Result:
    stream = conn.run_tx(tx_handle, Command(cypher, params, fetch_size))
    return Result(conn, stream, cypher, params)


class ExplicitTransaction:
    """A transaction begun and ended by the caller.

    ``on_closed`` is called once, when the transaction is committed or
    rolled back. Used as a context manager it rolls back on exit unless
    already finished.
    """

    def __init__(
        self,
        conn: TxConnection,
        fetch_size: int,
        tx_handle: Any,
        on_closed: Callable[[], None],
    ) -> None:
        self._conn = conn
        self._fetch_size = fetch_size
        self._tx_handle = tx_handle
        self._on_closed = on_closed
        self._done = False
        self._err: BaseException | None = None

    @property
    def done(self) -> bool:
        return self._done

    def run(self, cypher: str, params: Mapping[str, Any] | None) -> Result:
        """Run a statement within this transaction."""
        return _run(self._conn, self._tx_handle, self._fetch_size, cypher, params)

    def _finish(self, action: Callable[[Any], None]) -> None:
        if self._done:
            if self._err is not None:
                raise self._err
            return
        try:
            action(self._tx_handle)
        except Exception as exc:  # noqa: BLE001
            self._err = exc
        self._done = True
        self._on_closed()
        if self._err is not None:
            raise self._err

    def commit(self) -> None:
        """Commit the transaction; does nothing more once finished."""
        self._finish(self._conn.tx_commit)

    def rollback(self) -> None:
        """Roll back the transaction; does nothing more once finished."""
        self._finish(self._conn.tx_rollback)

    def close(self) -> None:
        """Roll back unless already committed or rolled back."""
        self.rollback()

    def __enter__(self) -> ExplicitTransaction:
        return self

    def __exit__(self, *exc_info: object) -> None:
        if not self._done:
            self.close()


class RetryableTransaction:
    """Transaction handed to transaction functions; the session ends it."""

    def __init__(self, conn: TxConnection, fetch_size: int, tx_handle: Any) -> None:
        self._conn = conn
        self._fetch_size = fetch_size
        self._tx_handle = tx_handle

    def run(self, cypher: str, params: Mapping[str, Any] | None) -> Result:
        """Run a statement within this transaction."""
        return _run(self._conn, self._tx_handle, self._fetch_size, cypher, params)

    @staticmethod
    def _refuse(action: str) -> UsageError:
        return UsageError(f"{action} not allowed on retryable transaction")

    def commit(self) -> None:
        """Refuse: the session commits transaction functions itself."""
        error = self._refuse("Commit")
        raise error

    def rollback(self) -> None:
        """Refuse: the session rolls back transaction functions itself."""
        error = self._refuse("Rollback")
        raise error

    def close(self) -> None:
        """Refuse: the session closes transaction functions itself."""
        error = self._refuse("Close")
        raise error


class AutoTransaction:
    """An auto-commit statement whose result is still pending."""

    def __init__(self, conn: Any, result: Result, on_closed: Callable[[], None]) -> None:
        self.conn = conn
        self.result = result
        self.closed = False
        self._on_closed = on_closed

    def done(self) -> None:
        """Buffer the pending result and close, once."""
        if not self.closed:
            self.result.buffer()
            self.closed = True
            self._on_closed()

    def discard(self) -> None:
        """Consume the pending result, ignoring failures, and close, once."""
        if not self.closed:
            with contextlib.suppress(Exception):
                self.result.consume()
            self.closed = True
            self._on_closed()