"""
TF-IDF Document Search

Indexes a directory of documents, computes per-document TF-IDF vectors and
answers free-text queries ranked by relevance.

Main components:
- TextSearchEngine: Build/publish/search facade
- Tokenizer: Whitespace split, lowercase, alphabetic-only terms
- FrequencyAccumulator: Build-scoped term and document frequency counts
- Vectorizer: TF-IDF weight vectors
- InvertedIndex: Term -> weighted postings
- IndexBuilder: Two-pass index construction
- QueryEngine: Scoring and ranking over a published index
"""

from .search_engine import TextSearchEngine
from .tokenizer import Tokenizer
from .frequency import FrequencyAccumulator
from .vectorizer import Vectorizer
from .indexer import InvertedIndex
from .builder import IndexBuilder
from .ranker import QueryEngine
from .autocorrect import AutoCorrect
from .extraction import DocumentSource, FiletypeFilter, TextExtractor
from .storage import InMemoryVectorSink, NullVectorSink, SQLiteVectorSink, VectorSink
from .models import IndexBuildReport, IndexSnapshot, Posting, QueryResult, SearchHit
from .errors import (
    DegenerateCorpus,
    ExtractionError,
    IndexBuildCancelled,
    IndexNotReady,
    QueryParseError,
    SearchEngineError,
    StorageError,
)

__version__ = "1.0.0"

__all__ = [
    "TextSearchEngine",
    "Tokenizer",
    "FrequencyAccumulator",
    "Vectorizer",
    "InvertedIndex",
    "IndexBuilder",
    "QueryEngine",
    "AutoCorrect",
    "DocumentSource",
    "FiletypeFilter",
    "TextExtractor",
    "VectorSink",
    "NullVectorSink",
    "InMemoryVectorSink",
    "SQLiteVectorSink",
    "IndexBuildReport",
    "IndexSnapshot",
    "Posting",
    "QueryResult",
    "SearchHit",
    "SearchEngineError",
    "ExtractionError",
    "DegenerateCorpus",
    "StorageError",
    "QueryParseError",
    "IndexNotReady",
    "IndexBuildCancelled",
]
