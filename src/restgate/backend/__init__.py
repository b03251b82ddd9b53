"""Outbound side: request client and query construction for the backing service."""

from restgate.backend.client import RemoteRequestSpec, RestClient
from restgate.backend.query import SqlAttempt

__all__ = ["RemoteRequestSpec", "RestClient", "SqlAttempt"]
