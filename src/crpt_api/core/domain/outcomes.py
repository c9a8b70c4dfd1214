"""Normalized results of one submission attempt.

Every admitted call resolves to exactly one of these. The transport library's
response type never leaks past the submitter; it is mapped into ``Success``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Success:
    status_code: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass(frozen=True)
class RejectedByCapacity:
    message: str

    status_code = 429
    ok = False

    @property
    def body(self) -> str:
        return self.message


@dataclass(frozen=True)
class InvalidInput:
    message: str

    status_code = 500
    ok = False

    @property
    def body(self) -> str:
        return self.message


@dataclass(frozen=True)
class TransportFailure:
    message: str

    status_code = 500
    ok = False

    @property
    def body(self) -> str:
        return self.message


SubmissionOutcome = Union[Success, RejectedByCapacity, InvalidInput, TransportFailure]
