"""Contains the uniform results returned by every issue operation."""

from dataclasses import dataclass, field
from typing import Any, Literal, TypeAlias


@dataclass(frozen=True)
class FailureDetails:
    """Diagnostic information attached to failures caused by a non-2xx response."""

    status: int
    body: str | None
    request: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        """Render the details as a plain dictionary."""
        return {"status": self.status, "body": self.body, "request": self.request}


@dataclass(frozen=True)
class Success:
    """A successful operation carrying the response data."""

    data: Any
    ok: Literal[True] = field(default=True, init=False)

    def to_dict(self) -> dict[str, Any]:
        """Render the result as a plain dictionary."""
        return {"ok": True, "data": self.data}


@dataclass(frozen=True)
class Failure:
    """A failed operation.

    ``details`` is only populated when GitHub answered with a non-2xx status;
    validation failures and transport errors carry just the error message.
    """

    error: str
    details: FailureDetails | None = None
    ok: Literal[False] = field(default=False, init=False)

    def to_dict(self) -> dict[str, Any]:
        """Render the result as a plain dictionary."""
        rendered: dict[str, Any] = {"ok": False, "error": self.error}
        if self.details is not None:
            rendered["details"] = self.details.to_dict()
        return rendered


Result: TypeAlias = Success | Failure
