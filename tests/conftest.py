import pytest

from docsearch import InMemoryVectorSink, TextSearchEngine
from docsearch.errors import ExtractionError, StorageError


class FakeExtractor:
    """Serves document text from a dict; unknown handles fail extraction."""

    def __init__(self, documents):
        self.documents = documents
        self.calls = []

    def extract(self, handle):
        self.calls.append(handle)
        if handle not in self.documents:
            raise ExtractionError(handle, "no such document")
        return self.documents[handle], "text/plain"


class FailingSink(InMemoryVectorSink):
    """In-memory sink that refuses some document ids."""

    def __init__(self, failing):
        super().__init__()
        self.failing = set(failing)

    def store(self, document_id, vector):
        if document_id in self.failing:
            raise StorageError(document_id, "disk full")
        super().store(document_id, vector)


SCENARIO_A = {"doc1": "cat dog cat", "doc2": "dog bird"}

FRUIT = {
    "a": "apple apple banana",
    "b": "apple cherry",
    "c": "cherry cherry cherry",
    "d": "date",
}


def make_engine(documents, sink=None, **overrides):
    config_dict = {"VECTOR_DB_PATH": None, "PARALLEL_WORKERS": 1}
    config_dict.update(overrides)
    engine = TextSearchEngine(
        config_dict=config_dict,
        extractor=FakeExtractor(documents),
        sink=sink if sink is not None else InMemoryVectorSink(),
    )
    return engine


@pytest.fixture
def scenario_engine():
    engine = make_engine(SCENARIO_A)
    engine.build_index(handles=list(SCENARIO_A))
    return engine


@pytest.fixture
def fruit_engine():
    engine = make_engine(FRUIT)
    engine.build_index(handles=list(FRUIT))
    return engine
