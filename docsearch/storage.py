"""
Durable storage of computed TF-IDF vectors.

The inverted index is what searches run against; stored vectors are an
auxiliary export keyed by document id. Sinks signal every failure as a
StorageError so the builder can log it and carry on.
"""

import json
import logging
import sqlite3
import threading
from pathlib import Path
from typing import Dict, Mapping, Optional

from .errors import StorageError

logger = logging.getLogger(__name__)


class VectorSink:
    """Interface for vector persistence."""

    def store(self, document_id: str, vector: Mapping[str, float]) -> None:
        raise NotImplementedError

    def close(self) -> None:
        pass


class NullVectorSink(VectorSink):
    """Discards vectors. Used when persistence is disabled."""

    def store(self, document_id: str, vector: Mapping[str, float]) -> None:
        logger.debug(f"Vector for {document_id} not persisted ({len(vector)} terms)")


class InMemoryVectorSink(VectorSink):
    """Keeps vectors in a dict, mostly for tests and embedding."""

    def __init__(self):
        self.vectors: Dict[str, Dict[str, float]] = {}

    def store(self, document_id: str, vector: Mapping[str, float]) -> None:
        self.vectors[document_id] = dict(vector)

    def load(self, document_id: str) -> Optional[Dict[str, float]]:
        return self.vectors.get(document_id)

    def count(self) -> int:
        return len(self.vectors)


class SQLiteVectorSink(VectorSink):
    """
    Stores one row per document in SQLite, the vector serialized as JSON.

    Re-storing a document id overwrites the previous row.
    """

    def __init__(self, db_path):
        """
        Open (and create if needed) the vector database.

        Args:
            db_path: Path to the SQLite file, or ``":memory:"``.
        """
        self._db_path = db_path
        self._lock = threading.Lock()
        try:
            if db_path != ":memory:":
                Path(db_path).parent.mkdir(parents=True, exist_ok=True)
            self._conn = self._open_db()
            self._ensure_schema()
        except (OSError, sqlite3.Error) as e:
            raise StorageError("*", f"cannot open {db_path}: {e}") from e

    def _open_db(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), check_same_thread=False)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        self._conn.executescript("""
            CREATE TABLE IF NOT EXISTS tfidf_vectors (
                document_id  TEXT PRIMARY KEY,
                vector       TEXT NOT NULL,
                num_terms    INTEGER NOT NULL
            );
        """)
        self._conn.commit()

    def store(self, document_id: str, vector: Mapping[str, float]) -> None:
        """
        Persist a document's vector.

        Args:
            document_id: Document identifier.
            vector: TF-IDF vector.

        Raises:
            StorageError: If the write fails.
        """
        try:
            payload = json.dumps(dict(vector), sort_keys=True)
            with self._lock:
                self._conn.execute(
                    "INSERT OR REPLACE INTO tfidf_vectors (document_id, vector, num_terms) VALUES (?, ?, ?)",
                    (document_id, payload, len(vector)),
                )
                self._conn.commit()
        except (TypeError, ValueError, sqlite3.Error) as e:
            raise StorageError(document_id, str(e)) from e
        logger.debug(f"Stored TF-IDF vector for {document_id}")

    def load(self, document_id: str) -> Optional[Dict[str, float]]:
        """Load a stored vector, None if the document has none."""
        with self._lock:
            row = self._conn.execute(
                "SELECT vector FROM tfidf_vectors WHERE document_id = ?", (document_id,)
            ).fetchone()
        if row is None:
            return None
        return json.loads(row["vector"])

    def count(self) -> int:
        with self._lock:
            return self._conn.execute("SELECT COUNT(*) FROM tfidf_vectors").fetchone()[0]

    def close(self) -> None:
        with self._lock:
            self._conn.close()
