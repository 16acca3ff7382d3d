"""Fixtures for unit tests."""

from typing import Generator

import pytest
import structlog

from github_issue_ops.configuration.models import IssuesConfiguration
from github_issue_ops.github.abc import IssueTransportBase, TransportResponse
from github_issue_ops.github.adapter import IssuesClient
from github_issue_ops.github.request_builder import IssueRequest


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


class RecordingTransport(IssueTransportBase):
    """A transport that records every request and replays a canned response or error."""

    def __init__(self, response: TransportResponse | None = None, error: BaseException | None = None) -> None:
        """Initialize the transport with the response to return or the error to raise."""
        self.response = response or TransportResponse(status=200, json={}, raw="{}")
        self.error = error
        self.requests: list[IssueRequest] = []

    async def send(self, request: IssueRequest) -> TransportResponse:
        """Record the request and return the canned response."""
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def transport() -> RecordingTransport:
    """Provide a transport answering 200 with an empty JSON object."""
    return RecordingTransport()


@pytest.fixture
def configuration() -> IssuesConfiguration:
    """Provide a configuration with a token and repository already set."""
    return IssuesConfiguration(token="test-token", owner="octocat", repo="Hello-World", base_url="http://api.test")


@pytest.fixture
def client(configuration: IssuesConfiguration, transport: RecordingTransport) -> IssuesClient:
    """Provide a client wired to the recording transport and an empty environment."""
    return IssuesClient(configuration=configuration, transport=transport, environment={})


@pytest.fixture
def make_transport() -> type[RecordingTransport]:
    """Provide the recording transport class for tests that need a custom response."""
    return RecordingTransport
