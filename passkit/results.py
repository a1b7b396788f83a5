from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class Outcome(str, Enum):
    SUCCESS_WITH_DATA = "success_with_data"
    SUCCESS_NO_DATA = "success_no_data"
    CLIENT_UNCHANGED = "client_unchanged"
    NOT_APPLICABLE = "not_applicable"
    FAILURE = "failure"


class ErrorKind(str, Enum):
    STORAGE_UNAVAILABLE = "storage_unavailable"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class ServiceResult:
    """What a passkit service hands back to the transport layer.

    `status` is the wire status the protocol assigns to the outcome; the
    transport only renders it.
    """

    outcome: Outcome
    status: int
    body: Any = None
    error: Optional[ErrorKind] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.outcome is not Outcome.FAILURE

    @classmethod
    def with_data(cls, body: Any, status: int = 200) -> "ServiceResult":
        return cls(outcome=Outcome.SUCCESS_WITH_DATA, status=status, body=body)

    @classmethod
    def no_data(cls, status: int = 200) -> "ServiceResult":
        return cls(outcome=Outcome.SUCCESS_NO_DATA, status=status)

    @classmethod
    def unchanged(cls) -> "ServiceResult":
        return cls(outcome=Outcome.CLIENT_UNCHANGED, status=304)

    @classmethod
    def not_applicable(cls) -> "ServiceResult":
        return cls(outcome=Outcome.NOT_APPLICABLE, status=204)

    @classmethod
    def failure(cls, error: ErrorKind, *, status: int = 500, message: str = "") -> "ServiceResult":
        return cls(outcome=Outcome.FAILURE, status=status, error=error, message=message)
