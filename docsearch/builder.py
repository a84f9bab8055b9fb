"""
Two-pass index construction.

Pass 1 extracts and tokenizes every document and counts document
frequencies. IDF needs the statistics of the whole corpus, so vectors can
only be computed in pass 2, which also fills the inverted index and exports
each vector to the sink. Everything is written into fresh structures that
the caller publishes once the build succeeds.
"""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Sequence, Tuple

from .errors import DegenerateCorpus, ExtractionError, IndexBuildCancelled, StorageError
from .frequency import FrequencyAccumulator
from .indexer import InvertedIndex
from .models import IndexBuildReport, IndexSnapshot
from .storage import NullVectorSink
from .tokenizer import Tokenizer
from .vectorizer import Vectorizer

logger = logging.getLogger(__name__)


def document_id_for(handle) -> str:
    """Stable document id for a handle: its name when it has one."""
    return getattr(handle, "name", None) or str(handle)


class IndexBuilder:
    """Orchestrates tokenize -> accumulate -> vectorize -> insert -> store."""

    def __init__(self, config, tokenizer: Tokenizer, extractor, sink=None,
                 vectorizer: Optional[Vectorizer] = None):
        """
        Initialize the builder.

        Args:
            config: Configuration object.
            tokenizer: Tokenizer shared with the query side.
            extractor: Object with ``extract(handle) -> (text, content_type)``.
            sink: Object with ``store(document_id, vector)``.
            vectorizer: TF-IDF vectorizer.
        """
        self.config = config
        self.tokenizer = tokenizer
        self.extractor = extractor
        self.sink = sink or NullVectorSink()
        self.vectorizer = vectorizer or Vectorizer(config)

    def _check_cancelled(self, cancel_event: Optional[threading.Event]) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise IndexBuildCancelled("Index build cancelled; previous index left in place")

    def _read_terms(self, handle, cancel_event: Optional[threading.Event]) -> Optional[List[str]]:
        """Extract and tokenize one document, None if extraction failed."""
        self._check_cancelled(cancel_event)
        try:
            text, content_type = self.extractor.extract(handle)
        except ExtractionError as e:
            logger.warning(f"Skipping {handle}: {e.reason}")
            return None
        logger.debug(f"Indexing {handle} ({content_type})")
        return self.tokenizer.tokenize(text)

    def count_pass(self, handles: Sequence, accumulator: FrequencyAccumulator,
                   cancel_event: Optional[threading.Event] = None) -> Tuple[Dict[str, Dict[str, int]], int]:
        """
        Pass 1: extract, tokenize and count frequencies.

        Extraction and tokenization run on a thread pool. Document ids are
        resolved in handle order before anything is counted: a handle whose
        id was already taken is skipped, so document frequencies only ever
        cover documents that end up in the index.

        Args:
            handles: Documents to read.
            accumulator: Build-scoped frequency accumulator.
            cancel_event: Optional event checked between documents.

        Returns:
            Tuple of (term_frequencies, skipped).
            - term_frequencies: document_id -> term frequency map
            - skipped: number of documents that failed extraction or
              repeated an earlier document id
        """
        workers = max(1, int(getattr(self.config, "PARALLEL_WORKERS", 1) or 1))
        term_frequencies = {}
        skipped = 0

        def read(handle):
            return handle, self._read_terms(handle, cancel_event)

        if workers == 1:
            outcomes = [read(handle) for handle in handles]
        else:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                outcomes = list(pool.map(read, handles))

        for handle, terms in outcomes:
            if terms is None:
                skipped += 1
                continue
            doc_id = document_id_for(handle)
            if doc_id in term_frequencies:
                logger.warning(f"Skipping {handle}: duplicate document id {doc_id}")
                skipped += 1
                continue
            term_frequencies[doc_id] = accumulator.observe(terms)

        return term_frequencies, skipped

    def build(self, handles: Sequence,
              cancel_event: Optional[threading.Event] = None) -> Tuple[IndexSnapshot, IndexBuildReport]:
        """
        Build a complete index over a fixed document set.

        Args:
            handles: Documents to index.
            cancel_event: Optional event; when set the build stops at the
                next document boundary.

        Returns:
            Tuple of (snapshot, report). The snapshot is frozen and ready to
            publish.

        Raises:
            DegenerateCorpus: If no document could be read.
            IndexBuildCancelled: If cancel_event was set during the build.
        """
        start = time.perf_counter()
        handles = list(handles)
        if not handles:
            raise DegenerateCorpus("No eligible documents to index")

        mode = getattr(self.config, "DF_MODE", "document")
        accumulator = FrequencyAccumulator(mode=mode)

        logger.info(f"Pass 1: counting frequencies over {len(handles)} documents")
        term_frequencies, skipped = self.count_pass(handles, accumulator, cancel_event)
        total_documents = len(term_frequencies)
        if total_documents == 0:
            raise DegenerateCorpus(f"None of the {len(handles)} documents could be extracted")

        document_frequency = accumulator.snapshot()
        index = InvertedIndex()
        storage_failures = 0

        logger.info(f"Pass 2: vectorizing {total_documents} documents")
        for doc_id in sorted(term_frequencies):
            self._check_cancelled(cancel_event)
            term_frequency = term_frequencies.pop(doc_id)
            vector = self.vectorizer.vectorize(term_frequency, document_frequency, total_documents)
            index.insert(doc_id, vector)
            try:
                self.sink.store(doc_id, vector)
            except StorageError as e:
                storage_failures += 1
                logger.warning(f"Vector sink failed for {doc_id}: {e.reason}")

        snapshot = IndexSnapshot.publish(index, document_frequency, total_documents)
        elapsed_millis = int((time.perf_counter() - start) * 1000)
        report = IndexBuildReport(
            documents_indexed=total_documents,
            elapsed_millis=elapsed_millis,
            documents_skipped=skipped,
            storage_failures=storage_failures,
            unique_terms=len(document_frequency),
        )
        logger.info(f"{total_documents} files indexed in: {elapsed_millis} ms "
                    f"({skipped} skipped, {storage_failures} storage failures)")
        return snapshot, report
