"""External service integrations."""

from .callback import CallbackNotifier
from .entrez import EntrezClient

__all__ = [
    "CallbackNotifier",
    "EntrezClient",
]
