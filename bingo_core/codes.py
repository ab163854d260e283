from __future__ import annotations

import random
import string
from typing import Optional

ALPHABET = string.ascii_uppercase
CODE_LENGTH = 4


def make_code(length: int = CODE_LENGTH, rng: Optional[random.Random] = None) -> str:
    """Random game code such as "QXRB"; an opaque lookup key, not a secret."""
    rng = rng or random.Random()
    return "".join(rng.choice(ALPHABET) for _ in range(length))


def normalize_code(code: Optional[str]) -> str:
    return (code or "").strip().upper()
