import math

import pytest

from docsearch.errors import DegenerateCorpus
from docsearch.vectorizer import Vectorizer


def test_idf_formula():
    assert Vectorizer.idf("x", {"x": 1}, 4) == pytest.approx(math.log(2.0))


def test_idf_zero_for_unseen_term():
    assert Vectorizer.idf("ghost", {}, 10) == 0.0


@pytest.mark.parametrize("n", [1, 2, 5, 100])
def test_idf_negative_when_term_in_every_document(n):
    value = Vectorizer.idf("x", {"x": n}, n)
    assert math.isfinite(value)
    assert value < 0
    assert value == pytest.approx(math.log(n / (n + 1)))


def test_idf_zero_when_df_plus_one_equals_n():
    assert Vectorizer.idf("x", {"x": 2}, 3) == 0.0


def test_vectorize_uses_raw_counts():
    vector = Vectorizer().vectorize({"cat": 2, "dog": 1}, {"cat": 1, "dog": 2}, 2)
    assert vector["cat"] == 0.0
    assert vector["dog"] == pytest.approx(math.log(2 / 3))


def test_vectorize_keeps_every_distinct_term():
    terms = ["a", "b", "a", "c"]
    vector = Vectorizer().vectorize_terms(terms, {"a": 1, "b": 3, "c": 1}, 3)
    assert set(vector) == {"a", "b", "c"}
    assert vector["a"] == pytest.approx(2 * math.log(3 / 2))
    assert vector["b"] < 0


def test_vectorize_rejects_empty_corpus():
    with pytest.raises(DegenerateCorpus):
        Vectorizer().vectorize({"a": 1}, {"a": 1}, 0)
