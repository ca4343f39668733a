from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from docintel.database.connection import get_connection
from docintel.database.models import ChunkRecord


class ChunkRepository:
    """Database operations for the document_chunks table."""

    def insert(
        self,
        document_id: int,
        chunk_index: int,
        content: str,
        embedding: list[float] | None,
    ) -> int:
        """Persist one chunk and return its ID."""
        embedding_value = Jsonb(embedding) if embedding is not None else None
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO document_chunks
                        (document_id, chunk_index, content, embedding)
                    VALUES (%s, %s, %s, %s)
                    RETURNING id
                    """,
                    (document_id, chunk_index, content, embedding_value),
                )
                row = cur.fetchone()
            conn.commit()
        assert row is not None
        return int(row[0])

    def list_embedded(self) -> list[ChunkRecord]:
        """Load every chunk of an active document that has an embedding.

        Rows come back in insertion order so equal scores keep a stable order.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT c.id, c.document_id, c.chunk_index, c.content,
                           c.embedding, d.original_name
                    FROM document_chunks c
                    JOIN documents d ON d.id = c.document_id
                    WHERE c.embedding IS NOT NULL AND d.is_active
                    ORDER BY c.id
                    """
                )
                rows = cur.fetchall()

        return [
            ChunkRecord(
                id=row["id"],
                document_id=row["document_id"],
                chunk_index=row["chunk_index"],
                content=row["content"],
                embedding=[float(v) for v in row["embedding"]],
                document_name=row["original_name"],
            )
            for row in rows
        ]

    def delete_by_document(self, document_id: int) -> int:
        """Delete all chunks owned by a document. Returns the deleted count."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "DELETE FROM document_chunks WHERE document_id = %s",
                    (document_id,),
                )
                deleted = cur.rowcount
            conn.commit()
        return deleted
