import logging
import math
import threading
from pathlib import Path

import pytest

from docsearch.builder import IndexBuilder
from docsearch.errors import DegenerateCorpus, IndexBuildCancelled
from docsearch.search_engine import Config
from docsearch.storage import InMemoryVectorSink
from docsearch.tokenizer import Tokenizer

from conftest import FRUIT, SCENARIO_A, FailingSink, FakeExtractor


def make_builder(documents, sink=None, **overrides):
    config = Config({"PARALLEL_WORKERS": 1, **overrides})
    return IndexBuilder(config, Tokenizer(config), FakeExtractor(documents), sink or InMemoryVectorSink())


def test_scenario_a_frequencies():
    snapshot, report = make_builder(SCENARIO_A).build(list(SCENARIO_A))

    assert dict(snapshot.document_frequency) == {"cat": 1, "dog": 2, "bird": 1}
    assert snapshot.total_documents == 2
    assert report.documents_indexed == 2
    assert report.unique_terms == 3
    assert report.documents_skipped == 0


def test_occurrence_mode_inflates_document_frequency():
    snapshot, _ = make_builder(SCENARIO_A, DF_MODE="occurrence").build(list(SCENARIO_A))
    assert dict(snapshot.document_frequency) == {"cat": 2, "dog": 2, "bird": 1}


def test_vectors_reach_sink_and_index():
    sink = InMemoryVectorSink()
    snapshot, _ = make_builder(SCENARIO_A, sink=sink).build(list(SCENARIO_A))

    assert sink.count() == 2
    assert sink.load("doc1") == {"cat": 0.0, "dog": pytest.approx(math.log(2 / 3))}
    assert snapshot.index.vector("doc2") == sink.load("doc2")


def test_vector_domain_matches_document_terms():
    sink = InMemoryVectorSink()
    make_builder(FRUIT, sink=sink).build(list(FRUIT))
    tokenizer = Tokenizer()

    for doc_id, text in FRUIT.items():
        assert set(sink.load(doc_id)) == set(tokenizer.tokenize(text))


def test_postings_match_vectors_both_ways():
    sink = InMemoryVectorSink()
    snapshot, _ = make_builder(FRUIT, sink=sink).build(list(FRUIT))
    index = snapshot.index

    for term in index.terms():
        for doc_id, weight in index.lookup(term):
            assert sink.load(doc_id)[term] == weight
    for doc_id, vector in sink.vectors.items():
        for term, weight in vector.items():
            assert (doc_id, weight) in index.lookup(term)


def test_empty_document_set_is_degenerate():
    with pytest.raises(DegenerateCorpus):
        make_builder({}).build([])


def test_all_extractions_failing_is_degenerate():
    with pytest.raises(DegenerateCorpus):
        make_builder({}).build(["missing1", "missing2"])


def test_extraction_failure_skips_document():
    snapshot, report = make_builder(SCENARIO_A).build(["doc1", "broken", "doc2"])

    assert report.documents_indexed == 2
    assert report.documents_skipped == 1
    assert snapshot.total_documents == 2
    assert "broken" not in snapshot.index


def test_storage_failure_does_not_abort_build():
    sink = FailingSink({"doc1"})
    snapshot, report = make_builder(SCENARIO_A, sink=sink).build(list(SCENARIO_A))

    assert report.storage_failures == 1
    assert report.documents_indexed == 2
    assert "doc1" in snapshot.index
    assert sink.load("doc1") is None
    assert sink.load("doc2") is not None


def test_cancelled_build_raises():
    cancel = threading.Event()
    cancel.set()
    with pytest.raises(IndexBuildCancelled):
        make_builder(SCENARIO_A).build(list(SCENARIO_A), cancel_event=cancel)


def test_parallel_count_pass_matches_serial():
    serial, _ = make_builder(FRUIT).build(list(FRUIT))
    parallel, _ = make_builder(FRUIT, PARALLEL_WORKERS=4).build(list(FRUIT))

    assert dict(serial.document_frequency) == dict(parallel.document_frequency)
    for doc_id in FRUIT:
        assert serial.index.vector(doc_id) == parallel.index.vector(doc_id)


def test_published_snapshot_is_read_only():
    snapshot, _ = make_builder(SCENARIO_A).build(list(SCENARIO_A))
    assert snapshot.index.frozen
    with pytest.raises(TypeError):
        snapshot.document_frequency["cat"] = 5


def test_empty_text_document_is_indexed_with_empty_vector():
    docs = {"blank": "123 !!!", "doc": "word"}
    snapshot, report = make_builder(docs).build(list(docs))
    assert report.documents_indexed == 2
    assert snapshot.index.vector("blank") == {}


def test_duplicate_document_ids_are_skipped_before_counting():
    docs = {
        Path("a/notes.txt"): "cat",
        Path("b/notes.txt"): "cat dog",
        Path("c/other.txt"): "bird",
    }
    snapshot, report = make_builder(docs).build(list(docs))

    assert report.documents_indexed == 2
    assert report.documents_skipped == 1
    assert snapshot.index.document_ids() == ["notes.txt", "other.txt"]
    assert snapshot.index.vector("notes.txt") == {"cat": pytest.approx(math.log(2 / 2))}
    for term, df in snapshot.document_frequency.items():
        containing = [doc_id for doc_id in snapshot.index.document_ids() if term in snapshot.index.vector(doc_id)]
        assert df == len(containing), term


def test_same_handle_twice_counts_once():
    snapshot, report = make_builder(SCENARIO_A, PARALLEL_WORKERS=2).build(["doc1", "doc1", "doc2"])

    assert dict(snapshot.document_frequency) == {"cat": 1, "dog": 2, "bird": 1}
    assert snapshot.total_documents == 2
    assert report.documents_skipped == 1


def test_per_document_progress_logs_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="docsearch.builder"):
        make_builder(SCENARIO_A).build(list(SCENARIO_A))

    per_file = [r for r in caplog.records if r.getMessage().startswith("Indexing doc")]
    assert len(per_file) == 2
    assert all(r.levelno == logging.DEBUG for r in per_file)
