"""Error taxonomy shared by the orchestrator and both transports.

Transports render every error as its message string; the class tells them
which status to report.
"""

from __future__ import annotations


class MorphServiceError(Exception):
    """Base class for all service errors."""

    kind = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class DecodeError(MorphServiceError):
    """The request body could not be decoded into a request."""

    kind = "decode"


class AnalysisError(MorphServiceError):
    """Analysis of a single form failed. Recovered per token."""

    kind = "analysis"

    def __init__(self, message: str, form: str | None = None) -> None:
        super().__init__(message)
        self.form = form


class EncodeError(MorphServiceError):
    """The reply could not be serialized."""

    kind = "encode"


class TokenizerError(MorphServiceError):
    """The tokenizer failed; the whole request fails."""

    kind = "tokenizer"
