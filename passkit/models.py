from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence


@dataclass(frozen=True)
class RegisterRequest:
    device_library_identifier: str
    pass_type_identifier: str
    serial_number: str
    push_token: str


@dataclass(frozen=True)
class SerialNumbersRequest:
    device_library_identifier: str
    pass_type_identifier: str
    # None and 0 both mean "since the beginning"
    passes_updated_since: Optional[int] = None


@dataclass(frozen=True)
class PassRequest:
    pass_type_identifier: str
    serial_number: str
    if_modified_since: Optional[int] = None


@dataclass(frozen=True)
class UnregisterRequest:
    device_library_identifier: str
    pass_type_identifier: str
    serial_number: str


@dataclass(frozen=True)
class LogRequest:
    logs: Sequence[str] = field(default_factory=tuple)
