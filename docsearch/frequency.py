"""
Term and document frequency accounting.

A FrequencyAccumulator lives for exactly one index build. It is created
fresh by the builder and dropped once the index is published, so counts
from one build never leak into the next.
"""

import threading
from collections import Counter
from typing import Dict, Iterable

DOCUMENT_MODE = "document"
OCCURRENCE_MODE = "occurrence"
DF_MODES = (DOCUMENT_MODE, OCCURRENCE_MODE)


class FrequencyAccumulator:
    """
    Tracks corpus-wide document frequency while handing out per-document
    term frequency maps.

    Two document-frequency semantics are supported:

    - ``"document"``: a term's DF is the number of distinct documents that
      contain it at least once. This is the standard definition and the
      default.
    - ``"occurrence"``: DF is bumped on every token occurrence, reproducing
      the inflated counts of the legacy indexer.
    """

    def __init__(self, mode: str = DOCUMENT_MODE):
        """
        Initialize an empty accumulator.

        Args:
            mode: Document-frequency semantics, ``"document"`` or ``"occurrence"``.
        """
        if mode not in DF_MODES:
            raise ValueError(f"Unknown document frequency mode {mode!r}, expected one of {DF_MODES}")
        self.mode = mode
        self._document_frequency: Counter = Counter()
        self._document_count = 0
        self._lock = threading.Lock()

    def observe(self, terms: Iterable[str]) -> Counter:
        """
        Account for one document's terms.

        Args:
            terms: The document's terms, in text order with repetitions.

        Returns:
            A fresh term frequency map (term -> count) for this document.
        """
        term_frequency = Counter(terms)
        if self.mode == DOCUMENT_MODE:
            increments = dict.fromkeys(term_frequency, 1)
        else:
            increments = term_frequency

        with self._lock:
            self._document_frequency.update(increments)
            self._document_count += 1
        return term_frequency

    def merge(self, other: "FrequencyAccumulator") -> None:
        """
        Fold a partial accumulator into this one.

        Args:
            other: Accumulator built over a disjoint set of documents with
                the same mode.
        """
        if other.mode != self.mode:
            raise ValueError(f"Cannot merge {other.mode!r} counts into {self.mode!r} accumulator")
        with other._lock:
            partial = Counter(other._document_frequency)
            partial_count = other._document_count
        with self._lock:
            self._document_frequency.update(partial)
            self._document_count += partial_count

    @property
    def document_count(self) -> int:
        """Number of documents observed so far."""
        return self._document_count

    def document_frequency(self, term: str) -> int:
        return self._document_frequency.get(term, 0)

    def snapshot(self) -> Dict[str, int]:
        """Return a copy of the document frequency map."""
        with self._lock:
            return dict(self._document_frequency)

    def __len__(self) -> int:
        return len(self._document_frequency)
