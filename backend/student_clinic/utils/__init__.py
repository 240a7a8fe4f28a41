#token helpers and the error boundary; request dependencies live in utils.deps
from .auth import create_access_token, verify_token
from .errors import failure_boundary

__all__ = [
    "create_access_token",
    "verify_token",
    "failure_boundary",
]
