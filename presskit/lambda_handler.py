"""AWS Lambda handler for Presskit."""

from typing import Any

from loguru import logger
from mangum import Mangum

from .api import app

# Lifespan builds the page service; background tasks finish before Mangum returns
handler = Mangum(app, lifespan="auto")


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """AWS Lambda entry point.

    Args:
        event: Lambda event dictionary containing request information.
        context: Lambda context object with runtime information.

    Returns:
        Response dictionary with statusCode, headers, and body.

    """
    logger.info("Lambda event: {}", event.get("rawPath") or event.get("path"))
    response = handler(event, context)
    logger.info("Lambda response status: {}", response.get("statusCode"))

    return response  # type: ignore[no-any-return]
