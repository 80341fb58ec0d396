"""Test utilities for wren applications::

    from wren.testing import TestClient, make_request
"""

from wren.testing.client import TestClient
from wren.testing.requests import make_request

__all__ = [
    "TestClient",
    "make_request",
]
