"""Settings for explicit and auto-commit transactions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

Configurer = Callable[["TransactionConfig"], None]


@dataclass
class TransactionConfig:
    """Transaction timeout in seconds (0 for server default) and metadata."""

    timeout: float = 0.0
    metadata: dict[str, Any] | None = None

    def apply(self, *args: Configurer) -> "TransactionConfig":
        """Apply configuration functions in order and return this config."""
        for configure in args:
            configure(self)
        return self


def with_tx_timeout(timeout: float) -> Configurer:
    """Return a configuration function that sets the transaction timeout."""

    def configure(config: TransactionConfig) -> None:
        config.timeout = timeout

    return configure


def with_tx_metadata(metadata: dict[str, Any] | None) -> Configurer:
    """Return a configuration function that attaches metadata to a transaction."""

    def configure(config: TransactionConfig) -> None:
        config.metadata = metadata

    return configure