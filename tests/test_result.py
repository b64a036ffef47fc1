import pytest

from cypherdriver.errors import UsageError
from cypherdriver.result import (
    Record,
    Result,
    as_record,
    as_records,
    collect,
    single,
)
from cypherdriver.summary import ResultSummary, Summary


class StreamError(Exception):
    pass


class ConnFake:
    """Replays ``nexts``; the last entry repeats forever."""

    def __init__(self, nexts=None, consume_sum=None, consume_err=None,
                 consume_hook=None, buffer_err=None):
        self.nexts = list(nexts or [])
        self.consume_sum = consume_sum
        self.consume_err = consume_err
        self.consume_hook = consume_hook
        self.buffer_err = buffer_err
        self.handles = []

    def keys(self, stream_handle):
        self.handles.append(stream_handle)
        return ["n", "m"]

    def next(self, stream_handle):
        self.handles.append(stream_handle)
        rec, summ, err = self.nexts[0]
        if len(self.nexts) > 1:
            self.nexts = self.nexts[1:]
        if err is not None:
            raise err
        return rec, summ

    def consume(self, stream_handle):
        if self.consume_hook:
            self.consume_hook()
        if self.consume_err is not None:
            raise self.consume_err
        return self.consume_sum

    def buffer(self, stream_handle):
        if self.buffer_err is not None:
            raise self.buffer_err


RECS = [Record(), Record(), Record()]
SUMS = [Summary()]
ERR = StreamError("Whatever")


def rec(r):
    return (r, None, None)


def summ(s):
    return (None, s, None)


def fail(e):
    return (None, None, e)


def new_result(conn):
    return Result(conn, 0, "", {})


def test_initialization():
    res = new_result(ConnFake())
    assert res.record is None
    assert res.err is None


def test_next_happy():
    res = new_result(ConnFake([rec(RECS[0]), rec(RECS[1]), summ(SUMS[0])]))
    assert res.next() is True
    assert res.record is RECS[0]
    assert res.next() is True
    assert res.record is RECS[1]
    assert res.next() is False
    assert res.record is None
    assert res.err is None


def test_next_error_after_one_record():
    res = new_result(ConnFake([rec(RECS[0]), fail(ERR)]))
    assert res.next() is True
    assert res.record is RECS[0]
    with pytest.raises(StreamError):
        res.next()
    assert res.record is None
    assert res.err is ERR


def test_next_proceed_after_error():
    res = new_result(ConnFake([rec(RECS[0]), fail(ERR)]))
    assert res.next() is True
    for _ in range(2):
        with pytest.raises(StreamError):
            res.next()
        assert res.record is None
        assert res.err is ERR


def test_iteration_yields_records():
    res = new_result(ConnFake([rec(RECS[0]), rec(RECS[1]), summ(SUMS[0])]))
    got = list(res)
    assert got[0] is RECS[0] and got[1] is RECS[1]
    assert len(got) == 2


def test_keys_use_stream_handle():
    conn = ConnFake()
    res = Result(conn, 7, "", None)
    assert res.keys() == ["n", "m"]
    assert conn.handles == [7]


def test_consume_with_summary():
    conn = ConnFake([rec(RECS[0])], consume_sum=Summary(server_name="srv"))
    res = Result(conn, 0, "RETURN 1", {"a": 1})
    res.next()
    assert res.record is not None
    summary = res.consume()
    assert isinstance(summary, ResultSummary)
    assert summary.statement.text == "RETURN 1"
    assert summary.statement.params == {"a": 1}
    assert summary.server.address == "srv"
    assert res.record is None
    assert res.err is None


def test_consume_with_error():
    conn = ConnFake([rec(RECS[0])], consume_err=ERR)
    res = new_result(conn)
    res.next()
    assert res.record is not None
    with pytest.raises(StreamError):
        res.consume()
    assert res.record is None
    assert res.err is ERR


def test_single_with_one_record():
    res = new_result(ConnFake([rec(RECS[0]), summ(SUMS[0])]))
    assert res.single() is RECS[0]
    assert res.record is RECS[0]
    assert res.err is None


def test_single_with_no_record():
    res = new_result(ConnFake([summ(SUMS[0])]))
    with pytest.raises(UsageError):
        res.single()
    assert res.record is None
    assert isinstance(res.err, UsageError)


def test_single_with_two_records():
    called = []
    conn = ConnFake(
        [rec(RECS[0]), rec(RECS[1]), summ(SUMS[0])],
        consume_hook=lambda: called.append(True),
        consume_sum=SUMS[0],
    )
    res = new_result(conn)
    with pytest.raises(UsageError):
        res.single()
    assert res.record is None
    assert isinstance(res.err, UsageError)
    assert called == [True]
    with pytest.raises(UsageError):
        res.consume()
    assert isinstance(res.err, UsageError)


def test_single_with_error():
    res = new_result(ConnFake([fail(ERR)]))
    with pytest.raises(StreamError):
        res.single()
    assert res.record is None
    assert res.err is ERR


def test_collect_n_records():
    res = new_result(ConnFake([rec(RECS[0]), rec(RECS[1]), summ(SUMS[0])]))
    coll = res.collect()
    assert len(coll) == 2
    assert coll[0] is RECS[0] and coll[1] is RECS[1]
    assert res.record is None
    assert res.err is None


def test_collect_n_records_after_next():
    res = new_result(
        ConnFake([rec(RECS[0]), rec(RECS[1]), rec(RECS[2]), summ(SUMS[0])])
    )
    res.next()
    assert res.record is RECS[0]
    coll = res.collect()
    assert len(coll) == 2
    assert coll[0] is RECS[1] and coll[1] is RECS[2]
    assert res.record is None
    assert res.err is None


def test_collect_empty():
    res = new_result(ConnFake([summ(SUMS[0])]))
    assert res.collect() == []
    assert res.record is None
    assert res.err is None


def test_collect_emptied():
    res = new_result(ConnFake([summ(SUMS[0])]))
    assert res.next() is False
    assert res.record is None
    assert res.collect() == []
    assert res.err is None


def test_collect_error():
    res = new_result(ConnFake([fail(ERR)]))
    with pytest.raises(StreamError):
        res.collect()
    assert res.record is None
    assert res.err is ERR


def test_collect_stream_error():
    res = new_result(ConnFake([rec(RECS[0]), fail(ERR)]))
    with pytest.raises(StreamError):
        res.collect()
    assert res.record is None
    assert res.err is ERR


def test_buffer_keeps_error_for_consume():
    res = new_result(ConnFake(buffer_err=ERR))
    res.buffer()
    assert res.err is ERR
    with pytest.raises(StreamError):
        res.consume()


def test_helpers_single_and_collect():
    res = new_result(ConnFake([rec(RECS[0]), summ(SUMS[0])]))
    assert single(res) is RECS[0]
    res2 = new_result(ConnFake([rec(RECS[1]), summ(SUMS[0])]))
    got = collect(res2)
    assert len(got) == 1 and got[0] is RECS[1]


def test_as_records():
    records = [RECS[0], RECS[1]]
    assert as_records(records) is records
    with pytest.raises(UsageError):
        as_records(RECS[0])
    with pytest.raises(UsageError):
        as_records([1, 2])


def test_as_record():
    assert as_record(RECS[2]) is RECS[2]
    with pytest.raises(UsageError):
        as_record([RECS[0]])
    with pytest.raises(UsageError):
        as_record(None)