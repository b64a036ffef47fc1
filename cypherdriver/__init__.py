"""Routing, results, summaries, transactions, value conversion and logging for a Cypher database client."""

__version__ = "0.1.0"

__all__ = [
    "cypher_values",
    "errors",
    "log",
    "result",
    "routing",
    "summary",
    "transaction",
    "transaction_config",
    "version",
]