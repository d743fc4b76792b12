"""In-memory key-value store."""

from loguru import logger


class InMemoryKVStore:
    """Dict-backed store for local development and tests."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}

    async def startup(self) -> None:
        logger.info("Using in-memory page cache")

    async def shutdown(self) -> None:
        self.data.clear()

    async def get(self, key: str) -> str | None:
        value = self.data.get(key)
        logger.debug(f"Cache {'hit' if value is not None else 'miss'}: {key}")
        return value

    async def put(self, key: str, value: str) -> None:
        self.data[key] = value

    async def health_check(self) -> bool:
        return True
