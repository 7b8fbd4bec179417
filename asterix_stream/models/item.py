from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class DecodedItem:
    """Result of one item decoder: decoded value and number of bytes consumed."""
    value: Any
    length: int
