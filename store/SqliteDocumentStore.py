# -----------------------------------------------------------------------------
# Created: 2026-02-08
# Description: SqliteDocumentStore
# -----------------------------------------------------------------------------
import json
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np

from document.KBDocument import KBDocument
from document.KBNamedVector import KBNamedVector
from errors.KBErrors import DocumentStoreError
from store.KBDocumentStore import KBDocumentStore
from utility.logging_utils import get_class_logger

SCHEMA = """
CREATE TABLE IF NOT EXISTS documents (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    content TEXT NOT NULL,
    metadata JSON,
    source TEXT,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
    updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS embeddings (
    doc_id INTEGER PRIMARY KEY,
    vector BLOB NOT NULL,
    dimension INTEGER NOT NULL,
    FOREIGN KEY (doc_id) REFERENCES documents(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS named_vectors (
    handle TEXT PRIMARY KEY,
    vector BLOB NOT NULL,
    description TEXT,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP
);

CREATE VIRTUAL TABLE IF NOT EXISTS documents_fts USING fts5(
    content,
    source,
    content=documents,
    content_rowid=id
);

CREATE TRIGGER IF NOT EXISTS documents_ai AFTER INSERT ON documents BEGIN
    INSERT INTO documents_fts(rowid, content, source)
    VALUES (new.id, new.content, new.source);
END;

CREATE TRIGGER IF NOT EXISTS documents_ad AFTER DELETE ON documents BEGIN
    INSERT INTO documents_fts(documents_fts, rowid, content, source)
    VALUES ('delete', old.id, old.content, old.source);
END;

CREATE TRIGGER IF NOT EXISTS documents_au AFTER UPDATE ON documents BEGIN
    INSERT INTO documents_fts(documents_fts, rowid, content, source)
    VALUES ('delete', old.id, old.content, old.source);
    INSERT INTO documents_fts(rowid, content, source)
    VALUES (new.id, new.content, new.source);
END;
"""

_DOC_COLUMNS = "d.id, d.content, d.metadata, d.source, d.created_at, d.updated_at"


def _to_blob(vector) -> bytes:
    return np.asarray(vector, dtype=np.float32).reshape(-1).tobytes()


def _from_blob(blob: bytes) -> np.ndarray:
    return np.frombuffer(blob, dtype=np.float32).copy()


class SqliteDocumentStore(KBDocumentStore):
    """
    Documents, their embeddings and named vectors in one SQLite file.
    Keyword search goes through an FTS5 index kept in sync by triggers.
    """

    def __init__(self, db_path: str = "./data/knowledge.db", *, logger=None):
        self.db_path = db_path
        self.logger = logger or get_class_logger(self.__class__)

        try:
            if db_path != ":memory:":
                Path(db_path).parent.mkdir(parents=True, exist_ok=True)
            # FastAPI runs sync endpoints on a threadpool
            self.conn = sqlite3.connect(db_path, check_same_thread=False)
            self.conn.row_factory = sqlite3.Row
            self.conn.execute("PRAGMA journal_mode = WAL")
            self.conn.execute("PRAGMA synchronous = NORMAL")
            self.conn.execute("PRAGMA foreign_keys = ON")
            self.conn.executescript(SCHEMA)
            self.conn.commit()
        except (sqlite3.Error, OSError) as e:
            raise DocumentStoreError(f"Failed to initialize document store at {db_path}: {e}") from e

        self.logger.info("Document store ready at %s", db_path)

    @contextmanager
    def _op(self, action: str):
        try:
            yield
        except sqlite3.Error as e:
            self.conn.rollback()
            self.logger.error("Document store failed to %s: %s", action, e)
            raise DocumentStoreError(f"Failed to {action}: {e}") from e

    @staticmethod
    def _row_to_document(row: sqlite3.Row) -> KBDocument:
        return KBDocument(
            id=row["id"],
            content=row["content"],
            metadata=json.loads(row["metadata"] or "{}"),
            source=row["source"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------
    def insert_document(
            self,
            content: str,
            metadata: Optional[Dict[str, Any]] = None,
            source: Optional[str] = None,
    ) -> int:
        with self._op("insert document"):
            cur = self.conn.execute(
                "INSERT INTO documents (content, metadata, source) VALUES (?, ?, ?)",
                (content, json.dumps(metadata or {}, default=str), source or "unknown"),
            )
            self.conn.commit()
        return int(cur.lastrowid)

    def get_document(self, doc_id: int) -> Optional[KBDocument]:
        with self._op(f"get document {doc_id}"):
            row = self.conn.execute(
                f"SELECT {_DOC_COLUMNS} FROM documents d WHERE d.id = ?",
                (doc_id,),
            ).fetchone()
        return self._row_to_document(row) if row else None

    def get_all_documents(self, limit: Optional[int] = None) -> List[KBDocument]:
        """Newest first."""
        sql = f"SELECT {_DOC_COLUMNS} FROM documents d ORDER BY d.created_at DESC, d.id DESC"
        params: tuple = ()
        if limit:
            sql += " LIMIT ?"
            params = (limit,)
        with self._op("list documents"):
            rows = self.conn.execute(sql, params).fetchall()
        return [self._row_to_document(r) for r in rows]

    def delete_document(self, doc_id: int) -> bool:
        with self._op(f"delete document {doc_id}"):
            cur = self.conn.execute("DELETE FROM documents WHERE id = ?", (doc_id,))
            self.conn.commit()
        return cur.rowcount > 0

    def count_documents(self) -> int:
        with self._op("count documents"):
            row = self.conn.execute("SELECT COUNT(*) FROM documents").fetchone()
        return int(row[0])

    def fulltext_search(self, query: str, limit: int = 10) -> List[KBDocument]:
        """FTS5 MATCH over content and source, best rank first."""
        with self._op("perform full-text search"):
            rows = self.conn.execute(
                f"""
                SELECT {_DOC_COLUMNS}
                FROM documents_fts fts
                JOIN documents d ON fts.rowid = d.id
                WHERE documents_fts MATCH ?
                ORDER BY rank
                LIMIT ?
                """,
                (query, limit),
            ).fetchall()
        return [self._row_to_document(r) for r in rows]

    # ------------------------------------------------------------------
    # Embeddings
    # ------------------------------------------------------------------
    def insert_embedding(self, doc_id: int, vector: np.ndarray) -> None:
        blob = _to_blob(vector)
        with self._op(f"insert embedding for doc {doc_id}"):
            self.conn.execute(
                "INSERT OR REPLACE INTO embeddings (doc_id, vector, dimension) VALUES (?, ?, ?)",
                (doc_id, blob, len(blob) // 4),
            )
            self.conn.commit()

    def get_embedding(self, doc_id: int) -> Optional[np.ndarray]:
        with self._op(f"get embedding for doc {doc_id}"):
            row = self.conn.execute(
                "SELECT vector FROM embeddings WHERE doc_id = ?", (doc_id,)
            ).fetchone()
        return _from_blob(row["vector"]) if row else None

    # ------------------------------------------------------------------
    # Named vectors
    # ------------------------------------------------------------------
    def save_named_vector(self, handle: str, vector: np.ndarray, description: Optional[str] = None) -> None:
        with self._op(f"save named vector '{handle}'"):
            self.conn.execute(
                "INSERT OR REPLACE INTO named_vectors (handle, vector, description) VALUES (?, ?, ?)",
                (handle, _to_blob(vector), description),
            )
            self.conn.commit()

    def get_named_vector(self, handle: str) -> Optional[KBNamedVector]:
        with self._op(f"get named vector '{handle}'"):
            row = self.conn.execute(
                "SELECT handle, vector, description, created_at FROM named_vectors WHERE handle = ?",
                (handle,),
            ).fetchone()
        if not row:
            return None
        return KBNamedVector(
            handle=row["handle"],
            vector=_from_blob(row["vector"]),
            description=row["description"],
            created_at=row["created_at"],
        )

    def get_all_named_vectors(self) -> List[KBNamedVector]:
        with self._op("list named vectors"):
            rows = self.conn.execute(
                "SELECT handle, vector, description, created_at FROM named_vectors ORDER BY handle"
            ).fetchall()
        return [
            KBNamedVector(
                handle=r["handle"],
                vector=_from_blob(r["vector"]),
                description=r["description"],
                created_at=r["created_at"],
            )
            for r in rows
        ]

    def delete_named_vector(self, handle: str) -> bool:
        with self._op(f"delete named vector '{handle}'"):
            cur = self.conn.execute("DELETE FROM named_vectors WHERE handle = ?", (handle,))
            self.conn.commit()
        return cur.rowcount > 0

    # ------------------------------------------------------------------
    # Utility
    # ------------------------------------------------------------------
    def get_stats(self) -> Dict[str, int]:
        with self._op("get database stats"):
            docs = self.conn.execute("SELECT COUNT(*) FROM documents").fetchone()[0]
            embs = self.conn.execute("SELECT COUNT(*) FROM embeddings").fetchone()[0]
            vecs = self.conn.execute("SELECT COUNT(*) FROM named_vectors").fetchone()[0]
        return {"documents": docs, "embeddings": embs, "named_vectors": vecs}

    def test_connection(self) -> bool:
        try:
            self.conn.execute("SELECT 1").fetchone()
            return True
        except sqlite3.Error as e:
            self.logger.error("Document store connection failed: %s", e)
            return False

    def close(self) -> None:
        try:
            self.conn.close()
        except sqlite3.Error as e:
            self.logger.error("Error closing document store: %s", e)
