"""Shared fixtures: in-memory tokenizer and analyser."""

from __future__ import annotations

from typing import Dict, List, Sequence

import pytest

from morph_service.errors import AnalysisError, TokenizerError
from morph_service.models import Entry, TagSet, Token, TokenKind
from morph_service.orchestrator import MorphOrchestrator


DICTIONARY: Dict[str, List[Entry]] = {
    "books": [Entry(lemma="book", tag_set=TagSet(pos="NOUN", tags=("PLURAL",)))],
    "read": [
        Entry(lemma="read", tag_set=TagSet(pos="VERB", tags=("PRESENT",))),
        Entry(lemma="read", tag_set=TagSet(pos="VERB", tags=("PAST",))),
        Entry(lemma="read", tag_set=TagSet(pos="VERB", tags=("PAST",))),
    ],
    "she": [Entry(lemma="she", tag_set=TagSet(pos="PRON", tags=("FEM", "SING")))],
    "сова": [Entry(lemma="сова", tag_set=TagSet(pos="NOUN", tags=("anim", "femn")))],
    "hmm": [],
}


class FakeTokenizer:
    """Whitespace tokenizer ending every stream with EOF."""

    def __init__(self) -> None:
        self.calls: List[str] = []

    def tokenize(self, text: str) -> Sequence[Token]:
        self.calls.append(text)
        if "\x00" in text:
            raise TokenizerError("NUL byte in input")
        tokens = [Token(form=form) for form in text.split()]
        tokens.append(Token(form="", kind=TokenKind.EOF))
        return tokens


class FakeAnalyser:
    """Dictionary lookup; unknown forms fail."""

    def __init__(self, dictionary: Dict[str, List[Entry]] | None = None) -> None:
        self.dictionary = DICTIONARY if dictionary is None else dictionary
        self.calls: List[str] = []

    def analyse(self, form: str) -> Sequence[Entry]:
        self.calls.append(form)
        if form not in self.dictionary:
            raise AnalysisError(f"unknown form: {form!r}", form=form)
        return list(self.dictionary[form])


@pytest.fixture
def tokenizer() -> FakeTokenizer:
    return FakeTokenizer()


@pytest.fixture
def analyser() -> FakeAnalyser:
    return FakeAnalyser()


@pytest.fixture
def orchestrator(tokenizer, analyser):
    orch = MorphOrchestrator(tokenizer, analyser)
    yield orch
    orch.close()


class FailingAnalyser(FakeAnalyser):
    """Fake analyser raising a given exception for selected forms."""

    def __init__(self, failures: Dict[str, Exception]) -> None:
        super().__init__()
        self.failures = failures

    def analyse(self, form: str) -> Sequence[Entry]:
        if form in self.failures:
            self.calls.append(form)
            raise self.failures[form]
        return super().analyse(form)
