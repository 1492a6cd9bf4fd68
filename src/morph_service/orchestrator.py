"""Request orchestration: text in, per-token analysis items out."""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Protocol, Sequence

from .errors import AnalysisError
from .models import AnalysisReply, Entry, Item, Token, TokenKind


LOGGER = logging.getLogger(__name__)


class Tokenizer(Protocol):
    def tokenize(self, text: str) -> Sequence[Token]:
        ...


class Analyser(Protocol):
    def analyse(self, form: str) -> Sequence[Entry]:
        ...


class MorphOrchestrator:
    """Drive tokenization and per-token analysis for one request at a time.

    The orchestrator holds no per-request state and can be shared by any
    number of concurrent requests. Analysis failures are isolated to the
    token that caused them; tokenizer failures propagate.

    Parameters
    ----------
    tokenizer:
        Adapter producing the token stream, ``EOF`` tokens included.
    analyser:
        Adapter analysing one lowercased form.
    max_workers:
        When greater than one, tokens of a request are analysed on a shared
        thread pool. Items are still returned in token order.
    """

    def __init__(
        self,
        tokenizer: Tokenizer,
        analyser: Analyser,
        max_workers: int = 1,
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1.")
        self._tokenizer = tokenizer
        self._analyser = analyser
        self._max_workers = max_workers
        self._executor: Optional[ThreadPoolExecutor] = None
        if max_workers > 1:
            self._executor = ThreadPoolExecutor(
                max_workers=max_workers, thread_name_prefix="morph-analyse"
            )

    @property
    def tokenizer(self) -> Tokenizer:
        return self._tokenizer

    @property
    def analyser(self) -> Analyser:
        return self._analyser

    def process(self, text: str) -> AnalysisReply:
        """Analyse every non-EOF token of ``text``.

        Returns
        -------
        AnalysisReply
            One item per non-EOF token; ``items[i]`` belongs to the i-th
            such token.
        """

        start = time.perf_counter()
        LOGGER.info("event=process status=starting text_len=%d", len(text))
        tokens = self._word_tokens(self._tokenizer.tokenize(text))

        executor = self._executor
        items: Optional[List[Item]] = None
        if executor is not None and len(tokens) > 1:
            try:
                items = list(executor.map(self._analyse_token, tokens))
            except RuntimeError:
                # Pool shut down by a concurrent close().
                LOGGER.warning(
                    "event=process status=pool_closed tokens=%d", len(tokens)
                )
        if items is None:
            items = [self._analyse_token(token) for token in tokens]

        elapsed_ms = (time.perf_counter() - start) * 1000.0
        LOGGER.info(
            "event=process status=finished items=%d errors=%d latency_ms=%.2f",
            len(items),
            sum(1 for item in items if item.failed),
            elapsed_ms,
        )
        return AnalysisReply(items=tuple(items))

    def analyse_form(self, form: str) -> Item:
        """Analyse a single form without tokenizing it."""

        return self._analyse_token(Token(form=form, kind=TokenKind.WORD))

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    @staticmethod
    def _word_tokens(tokens: Iterable[Token]) -> List[Token]:
        return [token for token in tokens if token.kind != TokenKind.EOF]

    def _analyse_token(self, token: Token) -> Item:
        try:
            entries = tuple(self._analyser.analyse(token.form.lower()))
        except AnalysisError as exc:
            LOGGER.debug(
                "event=analyse status=item_error form=%r error=%s", token.form, exc
            )
            return Item(form=token.form, error=_error_message(exc))
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception(
                "event=analyse status=item_error form=%r error=%s",
                token.form,
                exc.__class__.__name__,
            )
            return Item(form=token.form, error=_error_message(exc))
        return Item(form=token.form, entries=entries)


def _error_message(exc: Exception) -> str:
    """Return a non-empty failure message for ``exc``."""

    return str(exc) or exc.__class__.__name__
