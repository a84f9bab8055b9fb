"""
Value types shared across the indexing and query pipeline.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Dict, List, Mapping, NamedTuple

if TYPE_CHECKING:
    from .indexer import InvertedIndex


class Posting(NamedTuple):
    """A (document, weight) entry in a term's posting list."""
    document_id: str
    weight: float


class SearchHit(NamedTuple):
    """A ranked search result."""
    document_id: str
    score: float


@dataclass
class QueryResult:
    """
    Outcome of a single search.

    Attributes:
        total_matches: Number of candidate documents before truncation.
        elapsed_millis: Wall-clock time spent answering the query.
        hits: Ranked hits, best first, truncated to the result cap.
        suggestions: Spelling suggestions for query terms with no postings.
    """
    total_matches: int
    elapsed_millis: int
    hits: List[SearchHit] = field(default_factory=list)
    suggestions: Dict[str, str] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.hits)

    def __iter__(self):
        return iter(self.hits)

    @property
    def document_ids(self) -> List[str]:
        return [hit.document_id for hit in self.hits]


@dataclass
class IndexBuildReport:
    """Summary returned to the caller after an index build."""
    documents_indexed: int
    elapsed_millis: int
    documents_skipped: int = 0
    storage_failures: int = 0
    unique_terms: int = 0


@dataclass(frozen=True)
class IndexSnapshot:
    """
    A published, read-only index.

    Holds everything a query needs: the frozen inverted index, the corpus
    document frequencies and the number of documents the weights were
    computed against.
    """
    index: "InvertedIndex"
    document_frequency: Mapping[str, int]
    total_documents: int

    @classmethod
    def publish(cls, index, document_frequency: Dict[str, int], total_documents: int) -> "IndexSnapshot":
        """Freeze the index and wrap the frequency map read-only."""
        index.freeze()
        return cls(
            index=index,
            document_frequency=MappingProxyType(dict(document_frequency)),
            total_documents=total_documents,
        )
