"""
Document pipeline: one PDF in, one persisted Document out.

    IDLE -> INITIALIZING -> PROCESSING(1..N) -> FINALIZING -> DONE
                 \\               \\                 \\
                  +---------------+-----------------+--> ABORTED

Pages are processed strictly in ascending order, one at a time. The
document is only written to storage in FINALIZING, so a run that aborts
never leaves a partial record behind.
"""

import logging
import threading
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from infra.errors import (
    DocumentCancelled,
    NoCredentialAvailable,
    PersistenceFailed,
    RenderingFailed,
)
from infra.keypool import CredentialSelector, Provider
from infra.pdf_utils import PdfRenderer
from infra.pipeline.logger import PipelineLogger
from infra.storage.documents import Document, DocumentStore
from .processor import RetryingPageProcessor

logger = logging.getLogger(__name__)

STAGE_NAME = "convert"


def page_block(page_number: int, text: str) -> str:
    return f"\n\n<!-- Page {page_number} -->\n{text}"


class RunState(str, Enum):
    IDLE = "idle"
    INITIALIZING = "initializing"
    PROCESSING = "processing"
    FINALIZING = "finalizing"
    DONE = "done"
    ABORTED = "aborted"


@dataclass(frozen=True)
class DocumentSnapshot:
    document_id: str
    name: str
    content: str
    pages_done: int
    page_count: int

    @property
    def message(self) -> str:
        return f"Processing page {self.pages_done}/{self.page_count}"


class DocumentPipeline:
    def __init__(
        self,
        selector: CredentialSelector,
        processor: RetryingPageProcessor,
        renderer: PdfRenderer,
        document_store: DocumentStore,
        log_dir: Optional[Path] = None,
    ):
        self.selector = selector
        self.processor = processor
        self.renderer = renderer
        self.document_store = document_store
        self.log_dir = Path(log_dir) if log_dir else None

        self.state = RunState.IDLE

    def run(
        self,
        pdf_path: Path,
        provider,
        name: Optional[str] = None,
        on_snapshot: Optional[Callable[[DocumentSnapshot], None]] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> Document:
        pdf_path = Path(pdf_path)
        provider = Provider.parse(provider)

        try:
            return self._run(pdf_path, provider, name or pdf_path.stem, on_snapshot, cancel_event)
        except BaseException:
            self.state = RunState.ABORTED
            raise

    def _run(self, pdf_path, provider, name, on_snapshot, cancel_event) -> Document:
        self.state = RunState.INITIALIZING

        if not self.selector.has_eligible(provider):
            raise NoCredentialAvailable(provider.value)

        try:
            page_count = self.renderer.page_count(pdf_path)
        except RenderingFailed:
            raise
        except Exception as e:
            raise RenderingFailed(None, str(e)) from e

        document = Document(
            name=name,
            source_path=str(pdf_path),
            provider=provider.value,
            page_count=page_count,
        )

        pipeline_logger = self._create_logger(document.id)
        start = time.time()

        try:
            pipeline_logger.info(
                f"Converting {pdf_path.name} ({page_count} pages) with {provider.value}",
            )

            self.state = RunState.PROCESSING
            parts = []
            for page_number in range(1, page_count + 1):
                if cancel_event is not None and cancel_event.is_set():
                    pipeline_logger.warning(f"Cancelled before page {page_number}", page=page_number)
                    raise DocumentCancelled(document.id, page_number - 1)

                image = self._render(pdf_path, page_number)
                result = self.processor.process(provider, page_number, image, pipeline_logger=pipeline_logger)
                if result.failed:
                    document.failed_pages.append(page_number)

                parts.append(page_block(page_number, result.text))
                document.content = "".join(parts)

                if on_snapshot is not None:
                    on_snapshot(DocumentSnapshot(
                        document_id=document.id,
                        name=document.name,
                        content=document.content,
                        pages_done=page_number,
                        page_count=page_count,
                    ))

            self.state = RunState.FINALIZING
            document.touch()
            try:
                self.document_store.save(document)
            except Exception as e:
                pipeline_logger.error("Failed to save document", error=str(e))
                raise PersistenceFailed(document, str(e)) from e

            pipeline_logger.info(
                f"Completed {page_count} pages ({len(document.failed_pages)} failed)",
                duration_seconds=round(time.time() - start, 3),
            )
        except (NoCredentialAvailable, RenderingFailed) as e:
            pipeline_logger.error("Document aborted", error=str(e))
            raise
        finally:
            pipeline_logger.close()

        self.state = RunState.DONE
        return document

    def _render(self, pdf_path: Path, page_number: int):
        try:
            return self.renderer.render(pdf_path, page_number)
        except RenderingFailed:
            raise
        except Exception as e:
            raise RenderingFailed(page_number, str(e)) from e

    def _create_logger(self, doc_id: str) -> PipelineLogger:
        if self.log_dir is None:
            return PipelineLogger(doc_id, STAGE_NAME, log_dir=Path("."), json_output=False)
        return PipelineLogger(doc_id, STAGE_NAME, log_dir=self.log_dir / doc_id)
