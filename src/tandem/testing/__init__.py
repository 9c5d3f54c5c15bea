"""Test utilities for tandem handlers.

    from tandem.testing import TestClient
"""

from tandem.testing.client import TestClient

__all__ = ["TestClient"]
