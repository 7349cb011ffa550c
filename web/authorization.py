"""
Authorization types shared by executable functions and authorize services.
"""
from dataclasses import dataclass
from enum import Enum
from http import HTTPStatus
from typing import Optional, Protocol


class Authorize(Enum):
    """Whether a function requires an authorized caller."""

    UNKNOWN = 0
    REQUIRED = 1
    NOT_REQUIRED = 2


# Continue is accepted alongside OK; its intent is not documented further
AUTHORIZED_STATUSES = {HTTPStatus.OK, HTTPStatus.CONTINUE}


@dataclass
class AuthorizeResult:
    """Outcome of checking a bearer token."""

    status_code: Optional[int] = None
    error: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def is_authorized(self) -> bool:
        return self.status_code is not None and self.status_code in AUTHORIZED_STATUSES


class AuthorizeService(Protocol):
    """Checks the value of an Authorization header."""

    def authorize(self, bearer: str) -> AuthorizeResult:
        ...
