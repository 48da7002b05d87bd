"""User identifier generation."""

import secrets
from abc import ABC, abstractmethod

from outpost.domain.error import IdentifierGenerationError


class IdentifierGenerator(ABC):
    """Source of fresh, unique user identifiers."""

    @abstractmethod
    def generate(self) -> str:
        """Generate a new identifier.

        Raises:
            IdentifierGenerationError: If no identifier can be produced
        """
        pass


class RandomIdentifierGenerator(IdentifierGenerator):
    """Fixed-width hex identifiers from the operating system CSPRNG."""

    def __init__(self, num_bytes: int = 8) -> None:
        """Initialize generator.

        Args:
            num_bytes: Random bytes per identifier (hex output is twice as long)
        """
        if num_bytes < 1:
            raise ValueError("num_bytes must be positive")
        self.num_bytes = num_bytes

    def generate(self) -> str:
        try:
            return secrets.token_hex(self.num_bytes)
        except (OSError, NotImplementedError) as e:
            raise IdentifierGenerationError(
                f"randomness source unavailable: {e}"
            ) from e
