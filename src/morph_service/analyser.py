"""Analysis adapter backed by pymorphy3."""

from __future__ import annotations

import logging
import re
import threading
import time
from typing import Any, List, Optional

import pymorphy3

from .errors import AnalysisError
from .models import Entry, TagSet


LOGGER = logging.getLogger(__name__)

_GRAMMEME_SEPARATOR = re.compile(r"[ ,]+")
_UNKNOWN_GRAMMEME = "UNKN"


def _grammemes(tag: Any) -> List[str]:
    # pymorphy3 keeps grammemes as a frozenset; its textual form is ordered.
    return [g for g in _GRAMMEME_SEPARATOR.split(str(tag)) if g]


def tag_set_from_tag(tag: Any) -> TagSet:
    """Convert a pymorphy3 tag into a ``TagSet``.

    The part of speech is ``tag.POS`` when the engine provides one, otherwise
    the first grammeme (``PNCT``, ``NUMB``, ``LATN`` and friends).
    """

    grammemes = _grammemes(tag)
    pos = tag.POS or (grammemes[0] if grammemes else _UNKNOWN_GRAMMEME)
    tags = tuple(g for g in grammemes if g != pos)
    return TagSet(pos=str(pos), tags=tags)


class PymorphyAnalyser:
    """Dictionary-based morphological analyser.

    Parameters
    ----------
    lang:
        Dictionary language understood by pymorphy3 (``ru`` or ``uk``).
    known_only:
        When true, readings guessed by the engine's predictors are dropped
        and a form without dictionary readings is reported as a failure.
    """

    def __init__(self, lang: str = "ru", known_only: bool = False) -> None:
        self._lang = lang
        self._known_only = known_only
        self._morph: Optional[pymorphy3.MorphAnalyzer] = None
        self._load_lock = threading.Lock()

    @property
    def lang(self) -> str:
        return self._lang

    @property
    def morph(self) -> pymorphy3.MorphAnalyzer:
        """Return a lazy-loaded ``MorphAnalyzer``."""

        if self._morph is not None:
            return self._morph
        with self._load_lock:
            if self._morph is None:
                start = time.perf_counter()
                LOGGER.info("event=load_analyser status=starting lang=%s", self._lang)
                try:
                    self._morph = pymorphy3.MorphAnalyzer(lang=self._lang)
                except Exception as exc:  # noqa: BLE001
                    LOGGER.exception(
                        "event=load_analyser status=error lang=%s error=%s",
                        self._lang,
                        exc.__class__.__name__,
                    )
                    raise
                finally:
                    elapsed_ms = (time.perf_counter() - start) * 1000.0
                    LOGGER.info(
                        "event=load_analyser status=finished lang=%s latency_ms=%.2f",
                        self._lang,
                        elapsed_ms,
                    )
        return self._morph

    def analyse(self, form: str) -> List[Entry]:
        """Return the readings of a lowercased ``form`` in engine order.

        Raises
        ------
        AnalysisError
            If the engine fails or has no usable reading for the form.
        """

        morph = self.morph
        try:
            parses = morph.parse(form)
            if self._known_only:
                parses = [p for p in parses if p.is_known]
            entries = [
                Entry(lemma=p.normal_form, tag_set=tag_set_from_tag(p.tag))
                for p in parses
            ]
        except Exception as exc:  # noqa: BLE001
            raise AnalysisError(str(exc) or exc.__class__.__name__, form=form) from exc

        if self._known_only and not entries:
            raise AnalysisError(f"form not in dictionary: {form!r}", form=form)
        if all(e.tag_set.pos == _UNKNOWN_GRAMMEME for e in entries):
            raise AnalysisError(f"unknown form: {form!r}", form=form)
        return entries
