"""Frontmatter and markdown parsing."""

import re
from typing import Any

import markdown
import yaml
from loguru import logger

from .models import Frontmatter

MD_EXTENSIONS = ["fenced_code", "tables", "attr_list"]

_FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(.*?)(?:\r?\n)?^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


def parse_frontmatter(text: str) -> Frontmatter:
    """Split a leading ``---`` delimited YAML block from the markdown body.

    Documents without a block, or whose block is not a YAML mapping, yield
    empty attributes and keep the whole text as body.
    """
    match = _FRONTMATTER_RE.match(text)
    if not match:
        return Frontmatter(attrs={}, body=text)

    try:
        attrs: Any = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        logger.warning(f"Invalid frontmatter, rendering as body: {e}")
        return Frontmatter(attrs={}, body=text)

    if attrs is None:
        attrs = {}
    elif not isinstance(attrs, dict):
        logger.debug(f"Leading block is {type(attrs).__name__}, not frontmatter")
        return Frontmatter(attrs={}, body=text)

    return Frontmatter(attrs={str(k): v for k, v in attrs.items()}, body=text[match.end() :])


def parse_markdown(body: str) -> str:
    """Render markdown to HTML."""
    return markdown.markdown(body, extensions=MD_EXTENSIONS)
