"""HTTP layer: transport abstraction and response parsing."""
from .parser import ErrorPolicy, ResponseParser, default_error_policy
from .transport import HttpResponse, HttpxTransport, Transport

__all__ = [
    "ErrorPolicy",
    "HttpResponse",
    "HttpxTransport",
    "ResponseParser",
    "Transport",
    "default_error_policy",
]
