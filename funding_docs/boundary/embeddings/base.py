"""
Embedding contract.

Dependencies: abc
System role: Interface for chunk embedding backends
"""

from abc import ABC, abstractmethod


class Embedder(ABC):
    """Contract for services that turn chunk text into a fixed-size vector."""

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Length of every vector returned by embed()."""

    @abstractmethod
    async def embed(self, text: str) -> list[float]:
        """
        Embed a single chunk of text.

        Args:
            text: Chunk text

        Returns:
            list[float]: Vector of length dimension
        """
