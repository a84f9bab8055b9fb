"""
Query scoring and ranking.

Queries are scored straight from the TF-IDF weights stored in the inverted
index, so the vectors computed at build time are the only source of truth
for ranking.
"""

import logging
import time
from collections import defaultdict
from typing import Dict, List, Optional, Tuple

from .autocorrect import AutoCorrect
from .errors import QueryParseError
from .models import IndexSnapshot, QueryResult, SearchHit
from .tokenizer import Tokenizer

logger = logging.getLogger(__name__)


class QueryEngine:
    """Answers bag-of-terms queries against a published index snapshot."""

    def __init__(self, config, tokenizer: Tokenizer, snapshot: IndexSnapshot,
                 auto_correct: Optional[AutoCorrect] = None):
        """
        Initialize the engine over a snapshot.

        Args:
            config: Configuration object.
            tokenizer: The tokenizer the snapshot was built with.
            snapshot: Published, read-only index.
            auto_correct: Optional spelling suggester for unknown terms.
        """
        self.config = config
        self.tokenizer = tokenizer
        self.snapshot = snapshot
        self.auto_correct = auto_correct
        self._by_len_index = None
        if auto_correct is not None:
            self._by_len_index = auto_correct.build_len_index(snapshot.document_frequency)

    def query_terms(self, query: str) -> List[str]:
        """
        Normalize a query into its distinct terms, in first-seen order.

        Raises:
            QueryParseError: If the query is not a string.
        """
        if not isinstance(query, str):
            raise QueryParseError(f"Query must be a string, got {type(query).__name__}")
        return list(dict.fromkeys(self.tokenizer.tokenize(query)))

    def score(self, terms: List[str]) -> Dict[str, float]:
        """
        Accumulate a score per candidate document.

        The score is the dot product of query term presence with the
        document's TF-IDF weights. A posting contributes even when its
        weight is zero, so every document containing a query term is a
        candidate.

        Args:
            terms: Distinct query terms.

        Returns:
            Dict mapping document id to score.
        """
        scores = defaultdict(float)
        for term in terms:
            for doc_id, weight in self.snapshot.index.lookup(term):
                scores[doc_id] += weight
        return scores

    @staticmethod
    def rank(scores: Dict[str, float]) -> List[Tuple[str, float]]:
        """Sort by descending score, ties broken by ascending document id."""
        return sorted(scores.items(), key=lambda item: (-item[1], item[0]))

    def search(self, query: str, top_k: Optional[int] = None) -> QueryResult:
        """
        Search the snapshot.

        Args:
            query: Free-text query.
            top_k: Result cap. If None, uses config default.

        Returns:
            QueryResult with hits sorted best first and the total number of
            candidates before truncation.
        """
        start = time.perf_counter()
        if top_k is None:
            top_k = getattr(self.config, "TOP_K_RESULTS", 10)

        terms = self.query_terms(query)
        if not terms:
            return QueryResult(total_matches=0, elapsed_millis=0)

        ranked = self.rank(self.score(terms))
        hits = [SearchHit(doc_id, score) for doc_id, score in ranked[:max(0, top_k)]]

        suggestions = {}
        if self.auto_correct is not None:
            suggestions = self.auto_correct.suggest_for_terms(
                terms, self.snapshot.document_frequency, self._by_len_index
            )
            if suggestions:
                logger.debug(f"Query suggestions: {suggestions}")

        elapsed_millis = int((time.perf_counter() - start) * 1000)
        return QueryResult(
            total_matches=len(ranked),
            elapsed_millis=elapsed_millis,
            hits=hits,
            suggestions=suggestions,
        )
