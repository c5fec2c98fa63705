from .client import Call, TestClient

__all__ = [
    "Call",
    "TestClient",
]
