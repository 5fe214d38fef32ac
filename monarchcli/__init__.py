"""Transaction and tag service, write guards and JSON output envelopes for a Monarch Money client."""

__version__ = "0.3.1"

__all__ = [
    "errors",
    "output",
    "queries",
    "safety",
    "service",
    "transaction_models",
    "transactions",
    "version",
]