"""
Main TextSearchEngine class that orchestrates the entire search pipeline.

This module contains the main TextSearchEngine class that coordinates
document discovery, text extraction, index building and query processing.
A build writes into fresh structures and the finished snapshot is swapped
in at once, so searches never see a partially built index.
"""

import logging
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from .autocorrect import AutoCorrect
from .builder import IndexBuilder
from .errors import IndexNotReady, StorageError
from .extraction import DocumentSource, FiletypeFilter, TextExtractor
from .models import IndexBuildReport, IndexSnapshot, QueryResult
from .ranker import QueryEngine
from .storage import NullVectorSink, SQLiteVectorSink
from .tokenizer import Tokenizer, join_terms
from .utils import ResultFormatter
import config

logger = logging.getLogger(__name__)


class Config:
    """Settings from config.py, optionally overridden by a dictionary."""

    def __init__(self, config_dict: Optional[Dict[str, Any]] = None):
        for key in dir(config):
            if key.isupper():
                setattr(self, key, getattr(config, key))
        for key, value in (config_dict or {}).items():
            setattr(self, key, value)


class TextSearchEngine:
    """
    Main search engine class that provides a unified interface for text search.

    Collaborators (document source, text extractor, vector sink) can be
    injected; by default files are listed from the corpus directory, read
    as plain text or PDF, and vectors go to the SQLite database named by
    ``VECTOR_DB_PATH``.
    """

    def __init__(self, corpus_dir: Optional[str] = None, config_dict: Optional[Dict] = None,
                 source=None, extractor=None, sink=None):
        """
        Initialize the TextSearchEngine.

        Args:
            corpus_dir: Directory containing documents. If None, uses config default.
            config_dict: Optional configuration dictionary to override defaults.
            source: Document source with ``list(directory, predicate)``.
            extractor: Text extractor with ``extract(handle)``.
            sink: Vector sink with ``store(document_id, vector)``.
        """
        self.config = Config(config_dict)
        self.corpus_dir = Path(corpus_dir) if corpus_dir else Path(self.config.CORPUS_DIR)

        self.tokenizer = Tokenizer(self.config)
        self.source = source or DocumentSource()
        self.extractor = extractor or TextExtractor()
        self.sink = sink if sink is not None else self._default_sink()
        self.auto_correct = AutoCorrect(self.config) if self.config.AUTO_CORRECT_ENABLED else None
        self.result_formatter = ResultFormatter(self.config)

        self._build_lock = threading.Lock()
        self._query_engine: Optional[QueryEngine] = None
        self.last_report: Optional[IndexBuildReport] = None

    def _default_sink(self):
        db_path = self.config.VECTOR_DB_PATH
        if not db_path:
            return NullVectorSink()
        try:
            return SQLiteVectorSink(db_path)
        except StorageError as e:
            logger.warning(f"Vector persistence disabled: {e.reason}")
            return NullVectorSink()

    def list_documents(self) -> Sequence[Path]:
        """List the indexable documents of the corpus directory."""
        predicate = FiletypeFilter(self.config.TEXT_EXTENSIONS)
        return self.source.list(self.corpus_dir, predicate)

    def build_index(self, handles: Optional[Sequence] = None,
                    cancel_event: Optional[threading.Event] = None) -> IndexBuildReport:
        """
        Build the complete search index and publish it.

        Only one build runs at a time. The previous index, if any, keeps
        serving searches until the new one is complete; a failed or
        cancelled build leaves it in place.

        Args:
            handles: Documents to index. If None, lists the corpus directory.
            cancel_event: Optional event to cancel the build between documents.

        Returns:
            IndexBuildReport for the build.

        Raises:
            DegenerateCorpus: If there is nothing to index.
            IndexBuildCancelled: If the build was cancelled.
        """
        with self._build_lock:
            handles = list(self.list_documents() if handles is None else handles)
            logger.info(f"Building search index over {len(handles)} documents from {self.corpus_dir}")

            builder = IndexBuilder(self.config, self.tokenizer, self.extractor, self.sink)
            snapshot, report = builder.build(handles, cancel_event=cancel_event)

            self._query_engine = QueryEngine(self.config, self.tokenizer, snapshot, self.auto_correct)
            self.last_report = report
            logger.info("Index building complete!")
            return report

    @property
    def snapshot(self) -> Optional[IndexSnapshot]:
        engine = self._query_engine
        return engine.snapshot if engine is not None else None

    @property
    def is_ready(self) -> bool:
        return self._query_engine is not None

    def search(self, query: str, top_k: Optional[int] = None) -> QueryResult:
        """
        Search for documents matching the given query.

        Args:
            query: Search query string.
            top_k: Number of results to return. If None, uses config default.

        Returns:
            QueryResult with ranked hits.

        Raises:
            IndexNotReady: If no index has been published yet.
        """
        engine = self._query_engine
        if engine is None:
            raise IndexNotReady("Index not built. Call build_index() first.")

        result = engine.search(query, top_k=top_k)
        logger.debug(f"Query '{join_terms(engine.query_terms(query))}': "
                     f"{result.total_matches} matches in {result.elapsed_millis} ms")
        return result

    def interactive_search(self) -> None:
        """
        Start an interactive search session.

        This method provides a command-line interface for searching.
        Type 'exit' or 'quit' to end the session.
        """
        if not self.is_ready:
            print("Building index first...")
            self.build_index()

        print("\n=== Interactive Search ===")
        print("Type 'exit' or 'quit' to quit.")

        while True:
            try:
                query = input("Enter search query: ").strip()
            except (EOFError, KeyboardInterrupt):
                print("\nExiting.")
                break

            if not query:
                continue
            if query.lower() in ('exit', 'quit'):
                print("Goodbye!")
                break

            self.result_formatter.print_results_table(self.search(query))

    def get_stats(self) -> Dict[str, Any]:
        """
        Get statistics about the published index.

        Returns:
            Dictionary containing various statistics.
        """
        snapshot = self.snapshot
        if snapshot is None:
            return {"error": "Index not built"}

        stats = {
            "num_documents": snapshot.total_documents,
            "num_terms": len(snapshot.document_frequency),
            "num_postings": snapshot.index.num_postings,
            "df_mode": self.config.DF_MODE,
        }
        if self.last_report is not None:
            stats["documents_skipped"] = self.last_report.documents_skipped
            stats["storage_failures"] = self.last_report.storage_failures
            stats["build_millis"] = self.last_report.elapsed_millis
        return stats

    def close(self) -> None:
        """Release the vector sink."""
        self.sink.close()
