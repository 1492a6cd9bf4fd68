"""gRPC binding: ``morphrpc.Service/Analyse``."""

from __future__ import annotations

from .client import analyse
from .codec import reply_from_message, reply_to_message
from .service import MorphServicer, add_servicer_to_server, create_server, serve

__all__ = [
    "analyse",
    "reply_from_message",
    "reply_to_message",
    "MorphServicer",
    "add_servicer_to_server",
    "create_server",
    "serve",
]
