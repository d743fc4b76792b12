"""HTML page rendering with Jinja2."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .models import Content
from .types import NavItem

DEFAULT_TITLE = "Presskit"
NO_SUMMARY = " No summary yet."

TEMPLATES_DIR = Path(__file__).parent / "templates"
STATIC_DIR = Path(__file__).parent / "static"

_env = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(["html"]),
)


def render_home(home: Content, nav: list[NavItem]) -> str:
    """Render the home page shell around its HTML."""
    return _env.get_template("home.html").render(
        title=home.title or DEFAULT_TITLE,
        nav=nav,
        html_content=home.html,
    )


def render_page(content: Content, nav: list[NavItem]) -> str:
    """Render a content page with its AI summary block."""
    summary = content.summary["summary"] if content.summary else NO_SUMMARY
    return _env.get_template("page.html").render(
        title=content.title or DEFAULT_TITLE,
        nav=nav,
        summary=summary,
        html_content=content.html,
    )
