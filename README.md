# cypherdriver

Client-side building blocks for a client of a graph database that speaks
Cypher: cluster routing, result streaming, execution summaries,
transactions, value conversion and pluggable logging.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `cypherdriver.log`: the abstract `Logger` (methods `error`, `warn`,
  `info`, `debug`, each taking a component name and a log id) and three
  loggers. `Console` writes timestamped lines; each level (`errors`,
  `warns`, `infos`, `debugs`) is off until switched on, errors go to
  standard error and the rest to standard output unless other streams are
  given. `Void` drops everything. `StreamLog` passes each event as one
  `"[name id] text"` line to a `write_line` callable. `new_id()` hands out
  increasing, process-wide ids as strings.
- `cypherdriver.version`: `Version` (ordered by major, minor, patch) and
  `version_of()`, which parses strings such as `"Neo4j/4.1.3"`. An empty
  string gives 3.0.0, `"Neo4j/dev"` gives 0.0.0 and anything unrecognised
  gives -1.-1.-1. `USER_AGENT` holds the client's user agent string.
- `cypherdriver.cypher_values`: `native_to_cypher()`, `cypher_to_native()`
  and `value_response()` convert between Python values (None, bool, int,
  float, str, lists, dicts and node-like objects with `id`, `labels` and
  `props`) and tagged `{"name": ..., "data": ...}` mappings.
- `cypherdriver.errors`: `UsageError`, `Neo4jError`,
  `ReadRoutingTableError` and `wrap_routing_error()`, which leaves a
  `Neo4jError` as it is and wraps any other error.
- `cypherdriver.routing`: `RoutingTable`, `read_table()` and `Router`.
  The router keeps one routing table per database and honours its time to
  live. When a table is due it asks the routers it already knows about,
  then the root router, and then the routers returned by the
  `get_routers` hook. `readers()` and `writers()` retry on empty roles.
  `invalidate()` forces a refresh and `clean_up()` drops tables that are
  past due. The clock and sleep function can be injected.
- `cypherdriver.transaction_config`: `TransactionConfig` (timeout in
  seconds and metadata), `with_tx_timeout()`, `with_tx_metadata()` and
  `TransactionConfig.apply()`.
- `cypherdriver.summary`: `ResultSummary.from_summary()` builds the
  public summary from a raw `Summary`. It exposes `ServerInfo`,
  `Statement`, `StatementType`, `Counters`, `Plan`, `ProfiledPlan`,
  `Notification` and `InputPosition`.
- `cypherdriver.result`: `Record` and `Result`. A result supports
  `next()` with `record` and `err`, iteration, `keys()`, `collect()`,
  `single()`, `consume()` and `buffer()`. The helpers `single()`,
  `collect()`, `as_records()` and `as_record()` sit alongside it.
- `cypherdriver.transaction`: `ExplicitTransaction` (usable as a context
  manager that rolls back on exit), `RetryableTransaction` (refuses
  commit, rollback and close) and `AutoTransaction`.

## Example

```python
from cypherdriver.log import Void, new_id
from cypherdriver.routing import Router

router = Router(
    "root:7687",
    get_routers=lambda: [],
    router_context={},
    pool=my_pool,
    logger=Void(),
    log_id=new_id(),
)
writers = router.writers("neo4j")
```

`my_pool` can be any object with `borrow(servers, wait)` and
`return_connection(conn)` methods. The connections it hands out must
provide `get_routing_table(database, context)`.

## What this package does not do

The package has no wire protocol, connection pool, session or driver
object of its own, and it provides no command-line tool. Connections,
pools and stream handles come from the caller. `Result`, the transactions
and `Router` only call the methods listed in their protocols on those
objects.