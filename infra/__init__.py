from infra.config import Config
from infra.errors import (
    SmartMDError,
    NoCredentialAvailable,
    SecretDecryptionError,
    ConversionFailed,
    MalformedResponseError,
    RenderingFailed,
    PersistenceFailed,
    DocumentCancelled,
)
from infra.keypool import (
    Credential,
    Provider,
    SelectedCredential,
    SecretCipher,
    CredentialStore,
    CredentialSelector,
    CooldownRecorder,
)
from infra.storage import Document, DocumentStore
from infra.pdf_utils import PdfRenderer

__all__ = [
    # Config
    "Config",

    # Errors
    "SmartMDError",
    "NoCredentialAvailable",
    "SecretDecryptionError",
    "ConversionFailed",
    "MalformedResponseError",
    "RenderingFailed",
    "PersistenceFailed",
    "DocumentCancelled",

    # Key pool
    "Credential",
    "Provider",
    "SelectedCredential",
    "SecretCipher",
    "CredentialStore",
    "CredentialSelector",
    "CooldownRecorder",

    # Storage
    "Document",
    "DocumentStore",

    # Rendering
    "PdfRenderer",
]
