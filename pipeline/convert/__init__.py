"""
Convert stage: PDF pages -> vision endpoint -> Markdown document.

- processor.py: per-page retry loop with key rotation
- orchestrator.py: per-document state machine and persistence
"""

from .processor import (
    RetryingPageProcessor,
    PageResult,
    error_placeholder,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_FAILURES,
    DEFAULT_WAIT_SECONDS,
)
from .orchestrator import DocumentPipeline, DocumentSnapshot, RunState, page_block

__all__ = [
    'RetryingPageProcessor',
    'PageResult',
    'error_placeholder',
    'DEFAULT_MAX_ATTEMPTS',
    'DEFAULT_MAX_FAILURES',
    'DEFAULT_WAIT_SECONDS',
    'DocumentPipeline',
    'DocumentSnapshot',
    'RunState',
    'page_block',
]
