"""Testing utilities for tenantkit dispatchers."""

from tenantkit.testing.client import TestClient

__all__ = ["TestClient"]
