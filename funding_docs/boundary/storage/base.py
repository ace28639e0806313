"""
Content store contract.

The content store keeps the raw bytes of every ingested document under a
key derived from its content fingerprint and hands back an opaque locator
that the registry persists.

Dependencies: abc
System role: Interface for raw document storage backends
"""

from abc import ABC, abstractmethod


class ContentStore(ABC):
    """Contract for raw document blob storage."""

    @abstractmethod
    async def put(self, data: bytes, fingerprint: str, content_type: str) -> str:
        """
        Store bytes and return their locator.

        Writing the same fingerprint twice overwrites the same object.

        Args:
            data: Raw document bytes
            fingerprint: SHA-256 hex digest of data
            content_type: Declared media type

        Returns:
            str: Locator identifying the stored object

        Raises:
            StorageError: Backend unavailable or write rejected
        """

    @abstractmethod
    async def get(self, locator: str) -> bytes:
        """
        Read bytes previously stored under locator.

        Raises:
            StorageError: Locator unknown or backend unavailable
        """

    def object_key(self, fingerprint: str, prefix: str = "documents") -> str:
        """Key layout shared by all backends: <prefix>/<fp[:2]>/<fp>.pdf"""
        return f"{prefix.strip('/')}/{fingerprint[:2]}/{fingerprint}.pdf"
