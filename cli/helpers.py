import logging
import sys
from typing import Optional

from infra.config import Config, AppConfig, LibraryConfig, load_library_config
from infra.keypool import (
    CooldownRecorder,
    CredentialSelector,
    CredentialStore,
    Provider,
    SecretCipher,
)
from infra.pdf_utils import PdfRenderer
from infra.storage import DocumentStore
from infra.vision import PageConverter, VisionTransport
from pipeline.convert import DocumentPipeline, RetryingPageProcessor


def setup_logging(verbose: bool = False, config: Optional[AppConfig] = None):
    config = config or Config
    level = logging.DEBUG if verbose else getattr(logging, config.log_level)
    logging.basicConfig(level=level, format='%(levelname)s: %(message)s')


def open_key_store(config: Optional[AppConfig] = None) -> CredentialStore:
    """Open the key pool or exit with a readable message."""
    config = config or Config
    try:
        cipher = SecretCipher(config.secret_key)
    except ValueError as e:
        print(f"❌ {e}")
        sys.exit(1)

    try:
        return CredentialStore(cipher, state_file=config.keys_file)
    except ValueError as e:
        print(f"❌ Could not load key pool: {e}")
        sys.exit(1)


def open_document_store(config: Optional[AppConfig] = None) -> DocumentStore:
    return DocumentStore((config or Config).documents_dir)


def parse_provider(value: str) -> Provider:
    try:
        return Provider.parse(value)
    except ValueError as e:
        print(f"❌ {e}")
        sys.exit(1)


def create_converters(library_config: LibraryConfig, transport: Optional[VisionTransport] = None):
    transport = transport or VisionTransport()
    converters = {}
    for provider in Provider:
        provider_config = library_config.get_provider(provider.value)
        if provider_config is not None:
            converters[provider] = PageConverter(provider_config, transport=transport)
    return converters


def create_pipeline(
    store: CredentialStore,
    library_config: LibraryConfig,
    dpi: Optional[int] = None,
    config: Optional[AppConfig] = None,
) -> DocumentPipeline:
    config = config or Config
    policy = library_config.keypool
    selector = CredentialSelector(store)

    processor = RetryingPageProcessor(
        selector,
        create_converters(library_config),
        CooldownRecorder(store, policy.cooldown_seconds),
        max_attempts=policy.max_attempts,
        max_failures=policy.max_failures,
        wait_seconds=policy.wait_seconds,
    )

    return DocumentPipeline(
        selector,
        processor,
        PdfRenderer(dpi=dpi or library_config.defaults.dpi),
        open_document_store(config),
        log_dir=config.logs_dir,
    )


def load_config(config: Optional[AppConfig] = None) -> LibraryConfig:
    return load_library_config((config or Config).storage_root)


def format_remaining(seconds: float) -> str:
    if seconds <= 0:
        return "-"
    if seconds < 60:
        return f"{seconds:.0f}s"
    return f"{int(seconds // 60)}m {int(seconds % 60):02d}s"


def mask_secret(value: str) -> str:
    if not value:
        return "(not set)"
    if len(value) <= 8:
        return "****"
    return value[:4] + "..." + value[-4:]
