"""
Term tokenization.

Documents and queries are normalized with exactly the same rules, so the
Tokenizer instance that built an index is the one its queries go through.
"""

import re
from typing import Iterable, List


class Tokenizer:
    """Splits text on whitespace and keeps lowercase ASCII letters only."""

    _NON_ALPHA = re.compile(r"[^a-z]+")

    def __init__(self, config=None):
        """Initialize with configuration."""
        self.config = config

    def normalize(self, token: str) -> str:
        """
        Normalize a single whitespace-delimited token.

        Args:
            token: Raw token.

        Returns:
            The lowercase token with every non ``[a-z]`` character removed,
            possibly empty.
        """
        return self._NON_ALPHA.sub("", token.lower())

    def tokenize(self, text: str) -> List[str]:
        """
        Tokenize text into normalized terms.

        Order follows the original text and repeated terms are kept, since
        frequency counting relies on repetition. Numbers and punctuation-only
        tokens vanish.

        Args:
            text: Text to tokenize.

        Returns:
            List of terms.
        """
        terms = []
        for piece in text.split():
            term = self.normalize(piece)
            if term:
                terms.append(term)
        return terms


def join_terms(terms: Iterable[str]) -> str:
    """Render terms as space-joined text that tokenizes back to the same terms."""
    return " ".join(terms)
