"""
TF-IDF vector construction.

This module turns a document's term frequencies and the corpus document
frequencies into the weight vector that both the inverted index and the
vector sink consume.
"""

import math
from collections import Counter
from typing import Dict, Iterable, Mapping

from .errors import DegenerateCorpus


class Vectorizer:
    """Computes per-document TF-IDF weight vectors."""

    def __init__(self, config=None):
        """Initialize with configuration."""
        self.config = config

    @staticmethod
    def idf(term: str, document_frequency: Mapping[str, int], total_documents: int) -> float:
        """
        Inverse document frequency of a term.

        IDF formula: idf = ln(N / (df + 1)), and 0 for a term never observed.
        The value is negative for a term present in every document.

        Args:
            term: The term.
            document_frequency: Corpus document frequencies.
            total_documents: Number of documents in the corpus.

        Returns:
            IDF score.
        """
        df = document_frequency.get(term, 0)
        if df == 0:
            return 0.0
        return math.log(total_documents / (df + 1))

    def vectorize(self, term_frequency: Mapping[str, int], document_frequency: Mapping[str, int],
                  total_documents: int) -> Dict[str, float]:
        """
        Build the TF-IDF vector of one document.

        TF is the raw count of the term in the document, not normalized by
        document length. Every distinct term of the document gets an entry,
        including zero and negative weights.

        Args:
            term_frequency: The document's term -> count map.
            document_frequency: Corpus document frequencies.
            total_documents: Number of documents in the corpus.

        Returns:
            Dict mapping term to weight.

        Raises:
            DegenerateCorpus: If total_documents is not positive.
        """
        if total_documents <= 0:
            raise DegenerateCorpus(f"Cannot compute IDF over {total_documents} documents")

        vector = {}
        for term, tf in term_frequency.items():
            vector[term] = tf * self.idf(term, document_frequency, total_documents)
        return vector

    def vectorize_terms(self, terms: Iterable[str], document_frequency: Mapping[str, int],
                        total_documents: int) -> Dict[str, float]:
        """
        Build the TF-IDF vector straight from a document's term sequence.

        Args:
            terms: The document's terms with repetitions.
            document_frequency: Corpus document frequencies.
            total_documents: Number of documents in the corpus.

        Returns:
            Dict mapping term to weight.
        """
        return self.vectorize(Counter(terms), document_frequency, total_documents)
