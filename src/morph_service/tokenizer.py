"""Tokenizer adapter backed by a blank spaCy pipeline."""

from __future__ import annotations

import logging
import threading
import time
from typing import List, Optional

import spacy
from spacy.language import Language
from spacy.tokens import Token as SpacyToken

from .errors import TokenizerError
from .models import Token, TokenKind


LOGGER = logging.getLogger(__name__)


class SpacyTokenizer:
    """Split raw text into word-form tokens with spaCy's rule tokenizer.

    Only the tokenizer of ``spacy.blank(lang)`` is used, so no trained model
    has to be installed. The produced stream always ends with one ``EOF``
    token; filtering it out is the caller's job.
    """

    def __init__(self, lang: str = "ru") -> None:
        self._lang = lang
        self._nlp: Optional[Language] = None
        self._load_lock = threading.Lock()

    @property
    def lang(self) -> str:
        return self._lang

    @property
    def nlp(self) -> Language:
        """Return a lazy-loaded blank spaCy pipeline."""

        if self._nlp is not None:
            return self._nlp
        with self._load_lock:
            if self._nlp is None:
                start = time.perf_counter()
                LOGGER.info("event=load_tokenizer status=starting lang=%s", self._lang)
                try:
                    self._nlp = spacy.blank(self._lang)
                except Exception as exc:  # noqa: BLE001
                    LOGGER.exception(
                        "event=load_tokenizer status=error lang=%s error=%s",
                        self._lang,
                        exc.__class__.__name__,
                    )
                    raise TokenizerError(
                        f"cannot create tokenizer for language {self._lang!r}: {exc}"
                    ) from exc
                finally:
                    elapsed_ms = (time.perf_counter() - start) * 1000.0
                    LOGGER.info(
                        "event=load_tokenizer status=finished lang=%s latency_ms=%.2f",
                        self._lang,
                        elapsed_ms,
                    )
        return self._nlp

    def tokenize(self, text: str) -> List[Token]:
        """Return the tokens of ``text`` followed by a single ``EOF`` token."""

        tokenizer = self.nlp.tokenizer
        try:
            doc = tokenizer(text)
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception(
                "event=tokenize status=error text_len=%d error=%s",
                len(text),
                exc.__class__.__name__,
            )
            raise TokenizerError(f"tokenization failed: {exc}") from exc

        tokens = [
            Token(form=tok.text, kind=self._kind_of(tok))
            for tok in doc
            if not tok.is_space
        ]
        tokens.append(Token(form="", kind=TokenKind.EOF))
        return tokens

    @staticmethod
    def _kind_of(token: SpacyToken) -> TokenKind:
        if token.is_punct:
            return TokenKind.PUNCT
        if token.like_num:
            return TokenKind.NUMBER
        return TokenKind.WORD
