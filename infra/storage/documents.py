import json
import logging
import os
import tempfile
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Document(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    name: str
    content: str = ""
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    source_path: Optional[str] = None
    provider: Optional[str] = None
    page_count: int = 0
    failed_pages: List[int] = Field(default_factory=list)

    def touch(self):
        self.updated_at = _now()


class DocumentStore:
    """One JSON file per document under ``root``.

    Writes go through a temp file and ``os.replace`` so a crash never leaves
    a half-written document behind.
    """

    SUFFIX = ".json"

    def __init__(self, root: Path):
        self.root = Path(root).expanduser()
        self._lock = threading.Lock()

    def _path(self, document_id: str) -> Path:
        if not document_id or '/' in document_id or document_id.startswith('.'):
            raise ValueError(f"Invalid document id: {document_id!r}")
        return self.root / f"{document_id}{self.SUFFIX}"

    def save(self, document: Document) -> Path:
        path = self._path(document.id)

        with self._lock:
            self.root.mkdir(parents=True, exist_ok=True)
            fd, temp_path = tempfile.mkstemp(dir=self.root, prefix=f".{document.id}.tmp")
            try:
                with os.fdopen(fd, 'w') as f:
                    f.write(document.model_dump_json(indent=2))
                os.replace(temp_path, path)
            except Exception:
                try:
                    os.unlink(temp_path)
                except OSError:
                    pass
                raise

        logger.debug("Saved document %s to %s", document.id, path)
        return path

    def get(self, document_id: str) -> Optional[Document]:
        path = self._path(document_id)
        if not path.exists():
            return None

        with open(path, 'r') as f:
            return Document.model_validate(json.load(f))

    def list(self) -> List[Document]:
        """All documents, most recently updated first. Unreadable files are skipped."""
        if not self.root.exists():
            return []

        documents = []
        for path in self.root.glob(f"*{self.SUFFIX}"):
            if path.name.startswith('.'):
                continue
            try:
                with open(path, 'r') as f:
                    documents.append(Document.model_validate(json.load(f)))
            except (OSError, ValueError) as e:
                logger.warning("Skipping unreadable document file %s: %s", path.name, e)

        return sorted(documents, key=lambda d: d.updated_at, reverse=True)

    def delete(self, document_id: str) -> bool:
        path = self._path(document_id)
        with self._lock:
            if not path.exists():
                return False
            path.unlink()
        logger.debug("Deleted document %s", document_id)
        return True
