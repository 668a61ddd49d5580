"""Storage subsystem: converted documents on disk"""

from infra.storage.documents import Document, DocumentStore

__all__ = [
    "Document",
    "DocumentStore",
]
