"""Storage protocol definitions using typing.Protocol."""

from typing import Protocol


class KVStore(Protocol):
    """Flat key-value store mapping string keys to string values."""

    async def get(self, key: str) -> str | None:
        """Get stored value, or None when the key is absent."""
        ...

    async def put(self, key: str, value: str) -> None:
        """Store value under key, without expiry."""
        ...

    async def health_check(self) -> bool:
        """Check if the store is reachable."""
        ...

    async def startup(self) -> None:
        """Initialize store on startup."""
        ...

    async def shutdown(self) -> None:
        """Cleanup store on shutdown."""
        ...
