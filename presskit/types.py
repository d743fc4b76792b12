"""Type definitions for Presskit."""

from typing_extensions import NotRequired, TypedDict


class AiSummary(TypedDict):
    """Output of the summarization endpoint."""

    summary: str


class NavItem(TypedDict):
    """Navbar entry from the home page attributes."""

    link: str
    text: NotRequired[str]


class HealthStatus(TypedDict):
    """Health status of system components."""

    store: bool
    summarizer: bool
