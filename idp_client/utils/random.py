from __future__ import annotations

import secrets
import string
from typing import Protocol

ALPHABET = string.ascii_letters + string.digits


class RandomGenerator(Protocol):
    """Source of random strings used for the authorization state."""

    def generate(self, length: int) -> str:
        ...


class SecretsRandomGenerator:
    """Cryptographically strong alphanumeric strings backed by ``secrets``."""

    def __init__(self, alphabet: str = ALPHABET):
        if not alphabet:
            raise ValueError("Alphabet must not be empty")
        self.alphabet = alphabet

    def generate(self, length: int) -> str:
        if length < 1:
            raise ValueError("Length must be positive")
        return "".join(secrets.choice(self.alphabet) for _ in range(length))
