"""Tests for the spaCy tokenizer adapter."""

from __future__ import annotations

import threading
import time

import pytest

from morph_service import tokenizer as tokenizer_module
from morph_service.errors import TokenizerError
from morph_service.models import Token, TokenKind
from morph_service.tokenizer import SpacyTokenizer


@pytest.fixture(scope="module")
def tokenizer():
    return SpacyTokenizer(lang="ru")


class TestSpacyTokenizer:
    def test_sentence(self, tokenizer):
        tokens = tokenizer.tokenize("Мама мыла раму.")

        assert [t.form for t in tokens[:-1]] == ["Мама", "мыла", "раму", "."]
        assert tokens[-1] == Token(form="", kind=TokenKind.EOF)
        assert tokens[0].kind == TokenKind.WORD
        assert tokens[3].kind == TokenKind.PUNCT

    def test_numbers(self, tokenizer):
        tokens = tokenizer.tokenize("в 1812 году")

        assert tokens[1] == Token(form="1812", kind=TokenKind.NUMBER)

    @pytest.mark.parametrize("text", ["", "   ", "\n\t "])
    def test_no_word_content_yields_only_eof(self, tokenizer, text):
        assert tokenizer.tokenize(text) == [Token(form="", kind=TokenKind.EOF)]

    def test_whitespace_is_not_a_token(self, tokenizer):
        forms = [t.form for t in tokenizer.tokenize("сова  \n  летит")]

        assert forms == ["сова", "летит", ""]

    def test_pipeline_is_loaded_once(self, tokenizer):
        assert tokenizer.nlp is tokenizer.nlp

    def test_unknown_language_is_a_tokenizer_error(self):
        with pytest.raises(TokenizerError):
            SpacyTokenizer(lang="no-such-language").tokenize("x")


def test_pipeline_is_created_once_under_concurrency(monkeypatch):
    real_blank = tokenizer_module.spacy.blank
    created = []

    def slow_blank(lang):
        time.sleep(0.05)
        created.append(lang)
        return real_blank(lang)

    monkeypatch.setattr(tokenizer_module.spacy, "blank", slow_blank)
    tokenizer = SpacyTokenizer(lang="ru")
    seen = []
    threads = [
        threading.Thread(target=lambda: seen.append(tokenizer.nlp)) for _ in range(8)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert created == ["ru"]
    assert len(seen) == 8
    assert all(nlp is seen[0] for nlp in seen)
