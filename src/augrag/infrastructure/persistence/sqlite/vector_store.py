"""SQLite + sqlite-vec vector store implementation."""

import logging
from collections.abc import Sequence
from datetime import UTC, datetime

import aiosqlite

from augrag.domain.entities import Chunk, Document, SearchResult
from augrag.domain.exceptions import (
    ChunkVectorMismatch,
    StoreNotInitialized,
    ValidationError,
)
from augrag.domain.value_objects import StoreStats, TextChunk
from augrag.infrastructure.persistence.sqlite.connection import (
    open_connection,
    serialize_vector,
)

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS documents (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    label TEXT NOT NULL,
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_documents_label ON documents (label);
CREATE TABLE IF NOT EXISTS chunks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    document_id INTEGER NOT NULL REFERENCES documents (id),
    chunk_index INTEGER NOT NULL,
    text TEXT NOT NULL,
    size INTEGER NOT NULL,
    vec_rowid INTEGER NOT NULL UNIQUE,
    UNIQUE (document_id, chunk_index)
);
CREATE VIRTUAL TABLE IF NOT EXISTS vec_chunks USING vec0 (
    embedding float[{dimensions}]
);
"""

_SEARCH = """
WITH knn AS (
    SELECT rowid, distance FROM vec_chunks WHERE embedding MATCH ? AND k = ?
)
SELECT c.text, knn.distance, d.label, c.id, c.document_id, c.chunk_index
FROM knn
JOIN chunks c ON c.vec_rowid = knn.rowid
JOIN documents d ON d.id = c.document_id
ORDER BY knn.distance, c.id
"""

# Largest k a vec0 KNN query accepts.
_MAX_KNN = 4096


class SqliteVectorStore:
    """Embedded vector store: documents, chunks and a vec0 index in one SQLite file.

    One connection, one writer. Each save_document is a single transaction;
    concurrent ingestion from several callers must be serialised by the caller.
    """

    def __init__(self, database_path: str, dimensions: int = 1536) -> None:
        if dimensions <= 0:
            raise ValueError("dimensions must be positive")
        self._database_path = database_path
        self._dimensions = dimensions
        self._conn: aiosqlite.Connection | None = None

    @property
    def dimensions(self) -> int:
        return self._dimensions

    async def __aenter__(self) -> "SqliteVectorStore":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        await self.close()

    async def initialize(self) -> None:
        """Open the database and create the schema. Safe to call twice."""
        if self._conn is not None:
            return
        logger.info("Opening vector store at %s", self._database_path)
        conn = await open_connection(self._database_path)
        try:
            await conn.executescript(_SCHEMA.format(dimensions=self._dimensions))
            await conn.commit()
        except BaseException:
            await conn.close()
            raise
        self._conn = conn

    async def close(self) -> None:
        """Close the connection. The store cannot be used afterwards."""
        if self._conn is not None:
            await self._conn.close()
            self._conn = None
            logger.info("Vector store closed")

    def _connection(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise StoreNotInitialized("Vector store is not initialized")
        return self._conn

    def _check_vector(self, vector: Sequence[float]) -> None:
        if len(vector) != self._dimensions:
            raise ValidationError(
                f"Vector has {len(vector)} dimensions, expected {self._dimensions}"
            )

    async def save_document(
        self,
        label: str,
        chunks: Sequence[TextChunk],
        vectors: Sequence[Sequence[float]],
    ) -> int:
        """Persist a document with its chunks and vectors atomically.

        A document already stored under the same label is replaced.
        Returns the new document id.
        """
        conn = self._connection()
        if len(chunks) != len(vectors):
            raise ChunkVectorMismatch(
                f"Got {len(chunks)} chunks but {len(vectors)} vectors"
            )
        if not chunks:
            raise ValidationError("Document must have at least one chunk")
        if not label:
            raise ValidationError("Document label must not be empty")
        for vector in vectors:
            self._check_vector(vector)

        try:
            replaced = await self._delete_by_label(conn, label)
            cur = await conn.execute(
                "INSERT INTO documents (label, created_at) VALUES (?, ?)",
                (label, datetime.now(UTC).isoformat()),
            )
            document_id = cur.lastrowid
            for position, (chunk, vector) in enumerate(zip(chunks, vectors, strict=True)):
                cur = await conn.execute(
                    "INSERT INTO vec_chunks (embedding) VALUES (?)",
                    (serialize_vector(list(vector)),),
                )
                vec_rowid = cur.lastrowid
                await conn.execute(
                    "INSERT INTO chunks (document_id, chunk_index, text, size, vec_rowid) "
                    "VALUES (?, ?, ?, ?, ?)",
                    (document_id, position, chunk.text, chunk.size, vec_rowid),
                )
            await conn.commit()
        except BaseException:
            await conn.rollback()
            raise

        if replaced:
            logger.info("Replaced %d previous document(s) labelled %r", replaced, label)
        logger.info("Saved document %r (id=%s) with %d chunks", label, document_id, len(chunks))
        return document_id

    async def _delete_by_label(self, conn: aiosqlite.Connection, label: str) -> int:
        cur = await conn.execute("SELECT id FROM documents WHERE label = ?", (label,))
        document_ids = [r[0] for r in await cur.fetchall()]
        for document_id in document_ids:
            cur = await conn.execute(
                "SELECT vec_rowid FROM chunks WHERE document_id = ?", (document_id,)
            )
            vec_rowids = [r[0] for r in await cur.fetchall()]
            await conn.executemany(
                "DELETE FROM vec_chunks WHERE rowid = ?", [(r,) for r in vec_rowids]
            )
            await conn.execute("DELETE FROM chunks WHERE document_id = ?", (document_id,))
            await conn.execute("DELETE FROM documents WHERE id = ?", (document_id,))
        return len(document_ids)

    async def search(self, query_vector: Sequence[float], k: int) -> list[SearchResult]:
        """Return up to k nearest chunks, ascending by L2 distance."""
        conn = self._connection()
        if k <= 0:
            raise ValidationError("k must be positive")
        self._check_vector(query_vector)
        blob = serialize_vector(list(query_vector))
        rows = await self._knn(conn, blob, k)
        if len(rows) == k:
            # vec0 picks arbitrarily among rows tied at the cut; widen until the
            # cut distance rises so ties resolve by insertion order.
            cur = await conn.execute("SELECT COUNT(*) FROM vec_chunks")
            total = (await cur.fetchone())[0]
            fetch = k
            while rows[-1][1] == rows[k - 1][1] and fetch < min(total, _MAX_KNN):
                fetch = min(fetch * 2, total, _MAX_KNN)
                rows = await self._knn(conn, blob, fetch)
            rows = rows[:k]
        return [
            SearchResult(
                text=r[0],
                distance=float(r[1]),
                label=r[2],
                chunk_id=r[3],
                document_id=r[4],
                chunk_index=r[5],
            )
            for r in rows
        ]

    async def _knn(self, conn: aiosqlite.Connection, blob: bytes, k: int) -> list:
        cur = await conn.execute(_SEARCH, (blob, k))
        return list(await cur.fetchall())

    async def get_document(self, label: str) -> Document | None:
        """Get the document stored under label."""
        conn = self._connection()
        cur = await conn.execute(
            "SELECT id, label, created_at FROM documents WHERE label = ? ORDER BY id DESC LIMIT 1",
            (label,),
        )
        row = await cur.fetchone()
        if row is None:
            return None
        return Document(id=row[0], label=row[1], created_at=datetime.fromisoformat(row[2]))

    async def get_chunks(self, document_id: int) -> list[Chunk]:
        """Get a document's chunks ordered by index."""
        conn = self._connection()
        cur = await conn.execute(
            "SELECT id, document_id, chunk_index, text, size, vec_rowid FROM chunks "
            "WHERE document_id = ? ORDER BY chunk_index",
            (document_id,),
        )
        rows = await cur.fetchall()
        return [
            Chunk(id=r[0], document_id=r[1], index=r[2], text=r[3], size=r[4], vector_rowid=r[5])
            for r in rows
        ]

    async def get_stats(self) -> StoreStats:
        """Count documents, chunks and vectors."""
        conn = self._connection()
        counts = []
        for table in ("documents", "chunks", "vec_chunks"):
            cur = await conn.execute(f"SELECT COUNT(*) FROM {table}")
            row = await cur.fetchone()
            counts.append(row[0])
        return StoreStats(document_count=counts[0], chunk_count=counts[1], vector_count=counts[2])
