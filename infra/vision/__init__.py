"""
Vision endpoint client components.

- transport.py: HTTP requests
- response_parser.py: Response text and error extraction
- images.py: Page image encoding
- converter.py: Request building and outcome classification
"""

from .outcome import OutcomeStatus, PageOutcome
from .transport import VisionTransport
from .converter import PageConverter
from .prompts import TRANSCRIPTION_PROMPT

__all__ = [
    'OutcomeStatus',
    'PageOutcome',
    'VisionTransport',
    'PageConverter',
    'TRANSCRIPTION_PROMPT',
]
