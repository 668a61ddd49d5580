"""
Error taxonomy for document conversion.

Page-level problems (rate limits, conversion failures) are absorbed by the
page processor. Everything raised from here on is fatal to a document run
and carries enough context for the CLI to report a distinct reason.
"""

from typing import Optional


class SmartMDError(Exception):
    """Base class for all smartmd errors."""


class NoCredentialAvailable(SmartMDError):
    def __init__(self, provider: str, message: Optional[str] = None):
        self.provider = provider
        super().__init__(
            message or
            f"No available {provider.upper()} API keys. Please add keys or wait for cooldown."
        )


class SecretDecryptionError(SmartMDError):
    pass


class ConversionFailed(SmartMDError):
    pass


class MalformedResponseError(ConversionFailed):
    pass


class RenderingFailed(SmartMDError):
    def __init__(self, page_number: Optional[int], reason: str):
        self.page_number = page_number
        self.reason = reason
        where = f"page {page_number}" if page_number is not None else "document"
        super().__init__(f"Failed to render {where}: {reason}")


class PersistenceFailed(SmartMDError):
    """The document finished processing but could not be saved.

    The in-memory document is attached so callers can still show or export
    the content.
    """

    def __init__(self, document, reason: str):
        self.document = document
        self.reason = reason
        super().__init__(f"Failed to save document {document.id}: {reason}")


class DocumentCancelled(SmartMDError):
    def __init__(self, document_id: str, pages_done: int):
        self.document_id = document_id
        self.pages_done = pages_done
        super().__init__(f"Document {document_id} cancelled after {pages_done} page(s)")
