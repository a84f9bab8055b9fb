import main


def write_corpus(tmp_path):
    (tmp_path / "doc1.txt").write_text("cat dog cat", encoding="utf-8")
    (tmp_path / "doc2.txt").write_text("dog bird", encoding="utf-8")
    return tmp_path


def test_single_query(tmp_path, capsys):
    corpus = write_corpus(tmp_path)
    code = main.main(["--corpus-dir", str(corpus), "--query", "bird", "--no-store"])

    out = capsys.readouterr().out
    assert code == 0
    assert "2 files indexed" in out
    assert "1 document found" in out
    assert "doc2.txt" in out


def test_build_only_with_stats(tmp_path, capsys):
    corpus = write_corpus(tmp_path)
    db_path = tmp_path / "out" / "vectors.db"
    code = main.main(["--corpus-dir", str(corpus), "--build-only", "--stats", "--db-path", str(db_path)])

    out = capsys.readouterr().out
    assert code == 0
    assert "num_documents: 2" in out
    assert "Inverted Index Summary" in out
    assert db_path.exists()


def test_empty_corpus_fails(tmp_path, capsys):
    code = main.main(["--corpus-dir", str(tmp_path), "--build-only", "--no-store"])
    assert code == 1
    assert "No eligible documents" in capsys.readouterr().err
