"""Server version parsing and the driver's user agent."""

from __future__ import annotations

import re
from dataclasses import dataclass

USER_AGENT = "cypherdriver/4.0"

_VERSION_PATTERN = re.compile(
    r"(Neo4j/)?(\d+)\.(\d+)(?:\.)?(\d*)(\.|-|\+)?([0-9A-Za-z.\-]*)?"
)
_VERSION_IN_DEV = "Neo4j/dev"


@dataclass(frozen=True, order=True)
class Version:
    """A server version, ordered by major, minor and patch."""

    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


NO_VERSION = Version(-1, -1, -1)
IN_DEV_VERSION = Version(0, 0, 0)
DEFAULT_VERSION = Version(3, 0, 0)


def version_of(server: str) -> Version:
    """Parse a server version string such as ``"Neo4j/3.5.1"``.

    An empty string gives the default version 3.0.0, the development
    build gives 0.0.0 and anything unrecognised gives -1.-1.-1.
    """
    if not server:
        return DEFAULT_VERSION
    match = _VERSION_PATTERN.search(server)
    if match:
        major, minor, patch = match.group(2, 3, 4)
        return Version(int(major), int(minor), int(patch) if patch else 0)
    if server == _VERSION_IN_DEV:
        return IN_DEV_VERSION
    return NO_VERSION


V340 = version_of("3.4.0")
V350 = version_of("3.5.0")