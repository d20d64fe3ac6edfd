"""Slug generation utilities."""

import random
import string
from typing import Optional


class SlugGenerator:
    """Generate random fixed-length slugs.

    Generated slugs are not guaranteed to be unique; callers must check the
    candidate against the stores before using it.
    """

    # Base62 characters (lowercase, uppercase, digits)
    ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits

    def __init__(self, length: int = 6):
        """Initialize slug generator.

        Args:
            length: Length of generated slugs
        """
        if length < 1:
            raise ValueError(f"Slug length must be a positive integer (given value: {length})")
        self.length = length
        # OS entropy: no shared seed between rapid or concurrent calls
        self._random = random.SystemRandom()

    def generate(self, length: Optional[int] = None) -> str:
        """Generate a random slug.

        Args:
            length: Length of the slug (uses the configured length if not specified)

        Returns:
            Random slug drawn from the 62-symbol alphabet
        """
        length = length or self.length
        return ''.join(self._random.choices(self.ALPHABET, k=length))

    @staticmethod
    def is_valid_format(slug: str) -> bool:
        """Check if slug only uses characters from the generator alphabet.

        Args:
            slug: Slug to check

        Returns:
            True if valid format
        """
        return bool(slug) and all(c in SlugGenerator.ALPHABET for c in slug)
