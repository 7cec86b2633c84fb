"""Adapters connecting gcplog to other logging front-ends."""

from gcplog.adapters.logging import GCPLoggingHandler, install, record_from_logrecord

__all__ = [
    "GCPLoggingHandler",
    "install",
    "record_from_logrecord",
]
