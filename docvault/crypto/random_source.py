import secrets
from abc import ABC, abstractmethod


class RandomSource(ABC):
    """Contract for the random-byte provider used for keys and nonces."""

    @abstractmethod
    def token_bytes(self, n: int) -> bytes:
        """Return *n* random bytes.

        Production implementations must be cryptographically secure and
        safe to call from multiple threads.
        """


class SystemRandomSource(RandomSource):
    """Operating-system CSPRNG via the ``secrets`` module."""

    def token_bytes(self, n: int) -> bytes:
        return secrets.token_bytes(n)


def default_random_source() -> RandomSource:
    return SystemRandomSource()
