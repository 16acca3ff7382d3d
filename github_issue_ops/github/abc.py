"""Base ABC for issue transports."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from github_issue_ops.github.request_builder import IssueRequest


@dataclass(frozen=True)
class TransportResponse:
    """What a transport hands back: status code, parsed JSON body (if any) and raw body."""

    status: int
    json: Any = None
    raw: str | None = None


class IssueTransportBase(ABC):
    """Base ABC for issue transports.

    Implementations send exactly one request and return its response whatever
    the status code. They raise only when no response could be obtained.
    """

    @abstractmethod
    async def send(self, request: IssueRequest) -> TransportResponse:
        """Send a request and return the response."""
        pass
