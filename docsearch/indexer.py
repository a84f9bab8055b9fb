"""
Inverted index construction and management.

This module holds the term -> postings structure that queries are answered
from. Postings carry the TF-IDF weight of the term in the document, so the
index and the computed vectors are one and the same data.
"""

import logging
from collections import defaultdict
from typing import Dict, List, Mapping

from .models import Posting

logger = logging.getLogger(__name__)


class InvertedIndex:
    """Maps each term to the documents containing it and their weights."""

    def __init__(self):
        self._postings: Dict[str, Dict[str, float]] = defaultdict(dict)  # term -> {doc_id: weight}
        self._vectors: Dict[str, Dict[str, float]] = {}                  # doc_id -> vector
        self._frozen = False

    def insert(self, document_id: str, vector: Mapping[str, float]) -> None:
        """
        Add one posting per vector entry for a document.

        Every entry becomes a posting, zero weights included, so a term
        present in the document is always retrievable. Inserting a document
        id that is already indexed replaces its previous postings.

        Args:
            document_id: Stable document identifier.
            vector: The document's TF-IDF vector.
        """
        self._check_mutable()
        if document_id in self._vectors:
            logger.debug(f"Replacing postings for {document_id}")
            self._drop(document_id)

        stored = dict(vector)
        for term, weight in stored.items():
            self._postings[term][document_id] = weight
        self._vectors[document_id] = stored

    def remove(self, document_id: str) -> bool:
        """
        Remove every posting of a document.

        Args:
            document_id: Document to remove.

        Returns:
            True if the document was indexed.
        """
        self._check_mutable()
        if document_id not in self._vectors:
            return False
        self._drop(document_id)
        return True

    def _drop(self, document_id: str) -> None:
        for term in self._vectors.pop(document_id):
            postings = self._postings[term]
            del postings[document_id]
            if not postings:
                del self._postings[term]

    def _check_mutable(self) -> None:
        if self._frozen:
            raise RuntimeError("Index is published and read-only. Build a new index instead.")

    def freeze(self) -> None:
        """Make the index read-only. Called when the index is published."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def lookup(self, term: str) -> List[Posting]:
        """
        Get the posting list for a term.

        Args:
            term: Term to look up.

        Returns:
            Postings sorted by document id, empty if the term is unknown.
        """
        postings = self._postings.get(term)
        if not postings:
            return []
        return [Posting(doc_id, weight) for doc_id, weight in sorted(postings.items())]

    def vector(self, document_id: str) -> Dict[str, float]:
        """Return a copy of the vector indexed for a document, empty if unknown."""
        return dict(self._vectors.get(document_id, {}))

    def document_ids(self) -> List[str]:
        return sorted(self._vectors)

    def terms(self) -> List[str]:
        return sorted(self._postings)

    @property
    def num_postings(self) -> int:
        return sum(len(postings) for postings in self._postings.values())

    def __len__(self) -> int:
        return len(self._vectors)

    def __contains__(self, document_id: str) -> bool:
        return document_id in self._vectors

    def summarize_index(self) -> None:
        """Print a summary of the inverted index."""
        num_terms = len(self._postings)
        total_postings = self.num_postings

        print("\n=== Inverted Index Summary ===")
        print(f"Unique terms: {num_terms}")
        print(f"Total postings: {total_postings}")
        if num_terms:
            print(f"Average postings per term: {total_postings / num_terms:.2f}")
        print(f"Documents indexed: {len(self._vectors)}")

        posting_lengths = sorted(len(postings) for postings in self._postings.values())
        if posting_lengths:
            print(f"Min posting list length: {posting_lengths[0]}")
            print(f"Max posting list length: {posting_lengths[-1]}")
            print(f"Median posting list length: {posting_lengths[len(posting_lengths) // 2]}")
