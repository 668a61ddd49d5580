from dataclasses import dataclass
from enum import Enum
from typing import Optional


class OutcomeStatus(str, Enum):
    SUCCESS = "success"
    RATE_LIMITED = "rate_limited"
    FAILED = "failed"


@dataclass
class PageOutcome:
    status: OutcomeStatus
    text: str = ""
    error_message: Optional[str] = None
    status_code: Optional[int] = None
    execution_time_seconds: float = 0.0

    @property
    def success(self) -> bool:
        return self.status == OutcomeStatus.SUCCESS

    @property
    def rate_limited(self) -> bool:
        return self.status == OutcomeStatus.RATE_LIMITED

    @classmethod
    def succeeded(cls, text: str, status_code: int = 200, **kwargs) -> "PageOutcome":
        return cls(OutcomeStatus.SUCCESS, text=text or "", status_code=status_code, **kwargs)

    @classmethod
    def limited(cls, status_code: int = 429, **kwargs) -> "PageOutcome":
        return cls(
            OutcomeStatus.RATE_LIMITED,
            error_message="Rate limit exceeded",
            status_code=status_code,
            **kwargs
        )

    @classmethod
    def failed(cls, message: str, status_code: Optional[int] = None, **kwargs) -> "PageOutcome":
        return cls(
            OutcomeStatus.FAILED,
            error_message=message or "Unknown error occurred",
            status_code=status_code,
            **kwargs
        )
