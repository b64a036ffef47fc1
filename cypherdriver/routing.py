"""Routing of commands to the servers of a cluster."""

from __future__ import annotations

import math
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping, Protocol

from cypherdriver import log
from cypherdriver.errors import ReadRoutingTableError, wrap_routing_error

MISSING_WRITER_RETRIES = 100
MISSING_READER_RETRIES = 100
_RETRY_SLEEP = 0.1


class Cancelled(Exception):
    """Raised when reading a routing table was cancelled."""


@dataclass
class RoutingTable:
    """Servers of a cluster by role, valid for ``time_to_live`` seconds."""

    time_to_live: int = 0
    routers: list[str] = field(default_factory=list)
    readers: list[str] = field(default_factory=list)
    writers: list[str] = field(default_factory=list)


class Connection(Protocol):
    def get_routing_table(
        self, database: str, context: Mapping[str, str] | None
    ) -> RoutingTable | None: ...


class Pool(Protocol):
    def borrow(self, servers: list[str], wait: bool) -> Any: ...

    def return_connection(self, conn: Any) -> None: ...


def read_table(
    pool: Pool,
    database: str,
    routers: Iterable[str],
    router_context: Mapping[str, str] | None,
    is_cancelled: Callable[[], bool] | None = None,
) -> RoutingTable | None:
    """Read the routing table from the first of ``routers`` that provides one.

    Raises the last error encountered when no router gave a table.
    """
    err: BaseException = ReadRoutingTableError()
    for router in routers:
        try:
            conn = pool.borrow([router], True)
        except Exception as exc:  # noqa: BLE001
            if is_cancelled is not None and is_cancelled():
                raise wrap_routing_error(router, Cancelled("context cancelled")) from exc
            err = wrap_routing_error(router, exc)
            continue
        try:
            table = conn.get_routing_table(database, router_context)
        except Exception as exc:  # noqa: BLE001
            err = wrap_routing_error(router, exc)
            continue
        finally:
            pool.return_connection(conn)
        return table
    raise err


@dataclass
class _DatabaseRouter:
    due: int
    table: RoutingTable


class Router:
    """Keeps routing tables per database, refreshing them when due. Thread safe."""

    def __init__(
        self,
        root_router: str,
        get_routers: Callable[[], list[str]] | None,
        router_context: Mapping[str, str] | None,
        pool: Pool,
        logger: log.Logger,
        log_id: str,
        now: Callable[[], float] = time.time,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.root_router = root_router
        self.get_routers = get_routers
        self._context = router_context
        self.pool = pool
        self.log = logger
        self.log_id = log_id
        self.now = now
        self.sleep = sleep
        self._db_routers: dict[str, _DatabaseRouter] = {}
        self._lock = threading.Lock()
        self.log.info(log.ROUTER, self.log_id, "Created {context: %s}", router_context)

    @property
    def context(self) -> Mapping[str, str] | None:
        return self._context

    def _read(self, database: str, routers: list[str]) -> RoutingTable | None:
        return read_table(self.pool, database, routers, self._context)

    def _get_table(self, database: str) -> RoutingTable:
        now = self.now()
        with self._lock:
            entry = self._db_routers.get(database)
            if entry is not None and math.floor(now) < entry.due:
                return entry.table

            table: RoutingTable | None = None
            err: BaseException | None = None

            if entry is not None and entry.table.routers:
                routers = entry.table.routers
                self.log.info(
                    log.ROUTER, self.log_id,
                    "Reading routing table for '%s' from previously known routers: %s",
                    database, routers,
                )
                try:
                    table = self._read(database, routers)
                except Exception as exc:  # noqa: BLE001
                    err = exc

            if table is None or err is not None:
                self.log.info(
                    log.ROUTER, self.log_id,
                    "Reading routing table from initial router: %s", self.root_router,
                )
                try:
                    table, err = self._read(database, [self.root_router]), None
                except Exception as exc:  # noqa: BLE001
                    table, err = None, exc

            if err is not None and self.get_routers is not None:
                routers = self.get_routers()
                self.log.info(
                    log.ROUTER, self.log_id,
                    "Reading routing table for '%s' from custom routers: %s",
                    database, routers,
                )
                try:
                    table, err = self._read(database, routers), None
                except Exception as exc:  # noqa: BLE001
                    table, err = None, exc

            if err is not None:
                self.log.error(log.ROUTER, self.log_id, err)
                raise err

            if table is None:
                missing = RuntimeError("No error and no table")
                self.log.error(log.ROUTER, self.log_id, missing)
                raise missing

            self._db_routers[database] = _DatabaseRouter(
                due=math.floor(now + table.time_to_live), table=table
            )
            self.log.debug(
                log.ROUTER, self.log_id,
                "New routing table for '%s', TTL %d", database, table.time_to_live,
            )
            return table

    def _servers(self, database: str, role: str, retries: int) -> list[str]:
        table = self._get_table(database)
        while not getattr(table, role):
            retries -= 1
            if retries == 0:
                break
            self.log.info(log.ROUTER, self.log_id, "Invalidating routing table, no %s", role)
            self.invalidate(database)
            self.sleep(_RETRY_SLEEP)
            table = self._get_table(database)
        servers = getattr(table, role)
        if not servers:
            raise wrap_routing_error(self.root_router, RuntimeError(f"No {role}"))
        return servers

    def readers(self, database: str) -> list[str]:
        """Return the reader servers for ``database``."""
        return self._servers(database, "readers", MISSING_READER_RETRIES)

    def writers(self, database: str) -> list[str]:
        """Return the writer servers for ``database``."""
        return self._servers(database, "writers", MISSING_WRITER_RETRIES)

    def invalidate(self, database: str) -> None:
        """Force the next access to refresh the table using the last known routers."""
        self.log.info(log.ROUTER, self.log_id, "Invalidating routing table for '%s'", database)
        with self._lock:
            entry = self._db_routers.get(database)
            if entry is not None:
                entry.due = 0

    def clean_up(self) -> None:
        """Forget routing tables that are past due."""
        self.log.debug(log.ROUTER, self.log_id, "Cleaning up")
        now = math.floor(self.now())
        with self._lock:
            expired = [name for name, entry in self._db_routers.items() if now > entry.due]
            for name in expired:
                del self._db_routers[name]