"""Data models for the morphology service."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class TokenKind(str, Enum):
    """Kind of a token produced by the tokenizer adapter."""

    WORD = "WORD"
    NUMBER = "NUMBER"
    PUNCT = "PUNCT"
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """A single token of the input text.

    Attributes
    ----------
    form:
        Surface form exactly as it appears in the input.
    kind:
        Token kind. ``EOF`` marks the end of the stream and never reaches
        the reply.
    """

    form: str
    kind: TokenKind = TokenKind.WORD


@dataclass(frozen=True)
class TagSet:
    """Part of speech plus ordered grammatical feature tags of one reading."""

    pos: str
    tags: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Entry:
    """One candidate morphological reading of a word form."""

    lemma: str
    tag_set: TagSet


@dataclass(frozen=True)
class Item:
    """Per-token result.

    Attributes
    ----------
    form:
        Original token form (case preserved).
    entries:
        Readings in engine order. Empty when the engine found nothing or
        when analysis failed.
    error:
        Failure reason, set only when the analysis call itself failed.
    """

    form: str
    entries: Tuple[Entry, ...] = ()
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass(frozen=True)
class AnalysisRequest:
    """Incoming request, one per call."""

    input: str = ""


@dataclass(frozen=True)
class AnalysisReply:
    """Reply holding exactly one item per non-EOF token, in token order."""

    items: Tuple[Item, ...] = field(default_factory=tuple)
