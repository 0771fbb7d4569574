"""Tagged result type returned by the order and verification services."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Outcome(str, Enum):
    OK = "ok"
    VALIDATION_ERROR = "validation_error"
    SIGNATURE_MISMATCH = "signature_mismatch"
    UPSTREAM_ERROR = "upstream_error"
    CONFIGURATION_ERROR = "configuration_error"


@dataclass(frozen=True)
class Result:
    """One service outcome plus whatever detail that outcome carries.

    `value` is set for `OK`, `field` for `VALIDATION_ERROR` and `cause` for
    `UPSTREAM_ERROR`/`CONFIGURATION_ERROR`.
    """

    outcome: Outcome
    value: Any = None
    field: str | None = None
    cause: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK

    @classmethod
    def success(cls, value: Any = None) -> "Result":
        return cls(Outcome.OK, value=value)

    @classmethod
    def validation_error(cls, field: str, cause: str | None = None) -> "Result":
        return cls(Outcome.VALIDATION_ERROR, field=field, cause=cause)

    @classmethod
    def signature_mismatch(cls) -> "Result":
        return cls(Outcome.SIGNATURE_MISMATCH)

    @classmethod
    def upstream_error(cls, cause: str) -> "Result":
        return cls(Outcome.UPSTREAM_ERROR, cause=cause)

    @classmethod
    def configuration_error(cls, cause: str) -> "Result":
        return cls(Outcome.CONFIGURATION_ERROR, cause=cause)
