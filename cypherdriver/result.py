"""Streams of records produced by running a statement."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping, Protocol

from cypherdriver.errors import UsageError
from cypherdriver.summary import ResultSummary, Summary


@dataclass(eq=False)
class Record:
    """One row of a result: values in the order of the result keys."""

    values: list[Any] = field(default_factory=list)
    keys: list[str] = field(default_factory=list)


class StreamConnection(Protocol):
    """What a result needs from the connection streaming its records."""

    def keys(self, stream_handle: Any) -> list[str]: ...

    def next(self, stream_handle: Any) -> tuple[Record | None, Summary | None]: ...

    def consume(self, stream_handle: Any) -> Summary | None: ...

    def buffer(self, stream_handle: Any) -> None: ...


class Result:
    """Records of one statement, fetched from the connection on demand.

    Errors reported by the connection are raised and also kept in ``err``.
    After a failure or a usage error the result stays failed: ``consume``
    raises the kept error again.
    """

    def __init__(
        self,
        conn: StreamConnection,
        stream_handle: Any,
        cypher: str,
        params: Mapping[str, Any] | None,
    ) -> None:
        self._conn = conn
        self._stream = stream_handle
        self._cypher = cypher
        self._params = params
        self._summary: Summary | None = None
        self.record: Record | None = None
        self.err: BaseException | None = None

    def _advance(self) -> None:
        try:
            self.record, self._summary = self._conn.next(self._stream)
        except Exception as exc:
            self.record, self._summary, self.err = None, None, exc
            raise
        self.err = None

    def keys(self) -> list[str]:
        """Return the keys of the records in this result."""
        return self._conn.keys(self._stream)

    def next(self) -> bool:
        """Move to the next record; True when there is one in ``record``."""
        self._advance()
        return self.record is not None

    def __iter__(self) -> Iterator[Record]:
        while self.next():
            assert self.record is not None
            yield self.record

    def collect(self) -> list[Record]:
        """Fetch and return all remaining records."""
        if self.err is not None:
            raise self.err
        records: list[Record] = []
        while self._summary is None:
            self._advance()
            if self.record is not None:
                records.append(self.record)
        return records

    def buffer(self) -> None:
        """Have the connection buffer the rest of the stream.

        A failure is kept in ``err`` and raised by a later ``consume``.
        """
        try:
            self._conn.buffer(self._stream)
        except Exception as exc:
            self.err = exc
        else:
            self.err = None

    def single(self) -> Record:
        """Return the one and only record of the stream.

        Raises UsageError when there are no records or more than one.
        """
        self._advance()
        if self._summary is not None:
            self.err = UsageError("Result contains no more records")
            raise self.err
        only = self.record

        self._advance()
        if self.record is not None:
            # The caller did not expect more records: get rid of them.
            try:
                self._summary = self._conn.consume(self._stream)
            except Exception:  # noqa: BLE001
                self._summary = None
            self.err = UsageError("Result contains more than one record")
            self.record = None
            raise self.err

        self.record = only
        assert only is not None
        return only

    def consume(self) -> ResultSummary:
        """Discard the remaining records and return the summary."""
        if self.err is not None:
            raise self.err
        self.record = None
        try:
            self._summary = self._conn.consume(self._stream)
        except Exception as exc:
            self.err = exc
            raise
        return ResultSummary.from_summary(
            self._summary or Summary(), self._cypher, self._params
        )


def single(result: Result) -> Record:
    """Return the only record of ``result``."""
    return result.single()


def collect(result: Result) -> list[Record]:
    """Return all remaining records of ``result``."""
    return result.collect()


def as_records(value: Any) -> list[Record]:
    """Return ``value`` when it is a list of records, else raise UsageError."""
    if not isinstance(value, list) or not all(isinstance(v, Record) for v in value):
        raise UsageError(f"Expected type list[Record], not {type(value).__name__}")
    return value


def as_record(value: Any) -> Record:
    """Return ``value`` when it is a record, else raise UsageError."""
    if not isinstance(value, Record):
        raise UsageError(f"Expected type Record, not {type(value).__name__}")
    return value