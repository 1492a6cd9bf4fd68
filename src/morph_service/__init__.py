"""Per-token morphological analysis service.

This package exposes the stable public API:
- `MorphOrchestrator`
- `SpacyTokenizer`, `PymorphyAnalyser`
- `decode_request`, `reply_to_json`
- `create_app` (HTTP) and the `rpc` subpackage (gRPC)
"""

from __future__ import annotations

from .analyser import PymorphyAnalyser
from .api import decode_request, process_payload_to_json, reply_to_dict, reply_to_json
from .errors import (
    AnalysisError,
    DecodeError,
    EncodeError,
    MorphServiceError,
    TokenizerError,
)
from .models import AnalysisReply, AnalysisRequest, Entry, Item, TagSet, Token, TokenKind
from .orchestrator import MorphOrchestrator
from .tokenizer import SpacyTokenizer
from .web import create_app

__all__ = [
    "PymorphyAnalyser",
    "decode_request",
    "process_payload_to_json",
    "reply_to_dict",
    "reply_to_json",
    "AnalysisError",
    "DecodeError",
    "EncodeError",
    "MorphServiceError",
    "TokenizerError",
    "AnalysisReply",
    "AnalysisRequest",
    "Entry",
    "Item",
    "TagSet",
    "Token",
    "TokenKind",
    "MorphOrchestrator",
    "SpacyTokenizer",
    "create_app",
]
