"""
Exception hierarchy for the document search engine.

Failures local to a single document (extraction, storage) are contained by
the index builder and counted in the build report. Failures that affect the
whole corpus or the published index propagate to the caller.
"""


class SearchEngineError(Exception):
    """Base class for all search engine errors."""


class ExtractionError(SearchEngineError):
    """Text could not be obtained from a document."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not extract text from {path}: {reason}")


class DegenerateCorpus(SearchEngineError):
    """Indexing was invoked with zero eligible documents."""


class StorageError(SearchEngineError):
    """The external vector sink failed to store a vector."""

    def __init__(self, document_id: str, reason: str):
        self.document_id = document_id
        self.reason = reason
        super().__init__(f"Could not store vector for {document_id}: {reason}")


class QueryParseError(SearchEngineError):
    """The query could not be interpreted."""


class IndexNotReady(SearchEngineError):
    """A search was attempted before any index was published."""

    retryable = True


class IndexBuildCancelled(SearchEngineError):
    """The index build was cancelled between documents."""
