"""DynamoDB key-value store."""

import asyncio
from datetime import UTC, datetime
from typing import Any
from urllib.parse import parse_qs, urlparse

from loguru import logger

from ..exceptions import StorageError


def parse_dynamodb_url(url: str) -> tuple[str, str | None]:
    """Split ``dynamodb://table?region=us-east-1`` into table name and region."""
    parsed = urlparse(url)
    table_name = parsed.netloc or parsed.path.lstrip("/")
    region = parse_qs(parsed.query).get("region", [None])[0]
    return table_name, region


class DynamoDBKVStore:
    """DynamoDB store implementation.

    Items are keyed ``pk = "page#<key>"``, ``sk = "data"`` with the serialized
    record in the ``value`` attribute.
    """

    def __init__(self, table_name: str, region: str | None = None):
        self.table_name = table_name
        self.region = region
        self.table: Any = None

    @classmethod
    def from_url(cls, url: str) -> "DynamoDBKVStore":
        table_name, region = parse_dynamodb_url(url)
        return cls(table_name, region)

    async def startup(self) -> None:
        """Initialize DynamoDB table reference."""
        import boto3

        resource = boto3.resource("dynamodb", region_name=self.region)
        self.table = resource.Table(self.table_name)
        logger.info(f"DynamoDB page cache using table: {self.table_name} in {self.region}")

    async def shutdown(self) -> None:
        """No cleanup needed for DynamoDB."""
        pass

    async def get(self, key: str) -> str | None:
        if not self.table:
            raise StorageError("DynamoDB store not started")

        loop = asyncio.get_running_loop()
        response = await loop.run_in_executor(
            None, lambda: self.table.get_item(Key={"pk": f"page#{key}", "sk": "data"})
        )
        item = response.get("Item")
        if item is None:
            return None
        value = item.get("value")
        return value if isinstance(value, str) else None

    async def put(self, key: str, value: str) -> None:
        if not self.table:
            raise StorageError("DynamoDB store not started")

        item = {
            "pk": f"page#{key}",
            "sk": "data",
            "value": value,
            "updated_at": datetime.now(UTC).isoformat(),
        }
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, lambda: self.table.put_item(Item=item))

    async def health_check(self) -> bool:
        if not self.table:
            return False
        try:
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(None, lambda: self.table.table_status)
        except Exception as e:  # noqa: BLE001
            logger.warning(f"DynamoDB health check failed: {e}")
            return False
        else:
            return True
