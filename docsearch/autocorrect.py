"""
Spelling suggestions for query terms.

Suggestions come from the indexed vocabulary using Levenshtein distance,
ties going to the term found in more documents. They are advisory: the
query engine reports them next to the hits and never rewrites the query.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from rapidfuzz.distance import Levenshtein


class AutoCorrect:
    """Suggests in-vocabulary terms for unknown query terms."""

    def __init__(self, config):
        """Initialize with configuration."""
        self.config = config

    def _max_distance(self, max_dist: Optional[int]) -> int:
        if max_dist is None:
            max_dist = getattr(self.config, "MAX_EDIT_DISTANCE", 2)
        return max_dist

    def build_len_index(self, vocabulary: Iterable[str]) -> Dict[int, List[str]]:
        """
        Build a length-based index for efficient candidate lookup.

        Args:
            vocabulary: Indexed terms.

        Returns:
            Dictionary mapping term length to a sorted list of terms of that length.
        """
        index = defaultdict(list)
        for term in vocabulary:
            index[len(term)].append(term)
        for bucket in index.values():
            bucket.sort()
        return dict(index)

    def _candidate_terms(self, term: str, by_len_index: Mapping[int, List[str]], max_len_diff: int) -> List[str]:
        candidates = []
        for dL in range(-max_len_diff, max_len_diff + 1):
            bucket = by_len_index.get(len(term) + dL)
            if bucket:
                candidates.extend(bucket)
        return candidates

    def suggest_correction(self, term: str, term_freq: Mapping[str, int], by_len_index: Mapping[int, List[str]],
                           max_dist: Optional[int] = None) -> Tuple[Optional[str], Optional[int]]:
        """
        Suggest a correction for a term using edit distance and frequency.

        Args:
            term: Term to correct.
            term_freq: Document frequency of each indexed term.
            by_len_index: Length-based index of the vocabulary.
            max_dist: Maximum edit distance to consider.

        Returns:
            Tuple of (best_term, best_distance) or (None, None) if no good match.
        """
        max_dist = self._max_distance(max_dist)
        best_term, best_dist, best_freq = None, None, -1

        for cand in self._candidate_terms(term, by_len_index, max_dist):
            dist = Levenshtein.distance(term, cand, score_cutoff=max_dist)
            if dist <= max_dist:
                freq = term_freq.get(cand, 0)
                # Smaller distance first, then higher frequency
                if (best_dist is None) or (dist < best_dist) or (dist == best_dist and freq > best_freq):
                    best_term, best_dist, best_freq = cand, dist, freq
                if best_dist == 0:
                    break

        return best_term, best_dist

    def suggest_for_terms(self, terms: Iterable[str], term_freq: Mapping[str, int],
                          by_len_index: Mapping[int, List[str]], max_dist: Optional[int] = None) -> Dict[str, str]:
        """
        Suggest replacements for terms that are not in the vocabulary.

        Args:
            terms: Normalized query terms.
            term_freq: Document frequency of each indexed term.
            by_len_index: Length-based index of the vocabulary.
            max_dist: Maximum edit distance to consider.

        Returns:
            Dictionary mapping unknown term to its suggested replacement.
            Terms with no viable suggestion are left out.
        """
        suggestions = {}
        for term in terms:
            if term in term_freq or term in suggestions:
                continue
            suggestion, _ = self.suggest_correction(term, term_freq, by_len_index, max_dist=max_dist)
            if suggestion is not None and suggestion != term:
                suggestions[term] = suggestion
        return suggestions
