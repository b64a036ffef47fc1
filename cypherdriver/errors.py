"""Error types raised by the driver."""

from __future__ import annotations


class UsageError(Exception):
    """Raised when the driver is used in a way it does not allow."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class Neo4jError(Exception):
    """An error reported by the database server."""

    def __init__(self, code: str = "", msg: str = "") -> None:
        super().__init__(f"{code}: {msg}" if msg else code)
        self.code = code
        self.msg = msg


class ReadRoutingTableError(Exception):
    """Raised when no routing table could be retrieved."""

    def __init__(self, server: str = "", err: BaseException | None = None) -> None:
        super().__init__(server, err)
        self.server = server
        self.err = err

    def __str__(self) -> str:
        if self.err is not None or self.server:
            return f"Unable to retrieve routing table from {self.server}: {self.err}"
        return "Unable to retrieve routing table, no router provided"


def wrap_routing_error(server: str, err: BaseException) -> BaseException:
    """Keep errors from the database as they are and wrap any other error."""
    if isinstance(err, Neo4jError):
        return err
    return ReadRoutingTableError(server=server, err=err)