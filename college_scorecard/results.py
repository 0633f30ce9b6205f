"""Result types returned by the executor and the retrying fetcher."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union


class FailureReason(str, Enum):
    """Why a logical fetch did not produce a payload."""
    QUOTA_EXCEEDED = "quota_exceeded"
    TIME_LIMIT_EXCEEDED = "time_limit_exceeded"
    TRANSPORT_ERROR = "transport_error"
    HTTP_ERROR = "http_error"
    PARSE_ERROR = "parse_error"
    RETRIES_EXHAUSTED = "retries_exhausted"

    @property
    def is_gate_rejection(self) -> bool:
        """True for the pre-flight quota and time-budget rejections."""
        return self in (FailureReason.QUOTA_EXCEEDED, FailureReason.TIME_LIMIT_EXCEEDED)


@dataclass(frozen=True)
class HttpResponse:
    """Outcome of exactly one HTTP attempt. status_code is 0 on transport failure."""
    success: bool
    status_code: int
    body: Optional[str] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class Success:
    """Parsed JSON payload, either fresh from the network or from the cache."""
    payload: Any
    served_from_cache: bool = False

    ok = True


@dataclass(frozen=True)
class Failure:
    """Terminal failure of a logical fetch."""
    reason: FailureReason
    detail: str
    status_code: Optional[int] = None

    ok = False


FetchResult = Union[Success, Failure]
