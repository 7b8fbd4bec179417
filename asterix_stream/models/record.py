from dataclasses import dataclass, field
from typing import Any, Dict


# Diagnostic keys stored in Record.diagnostics
UNKNOWN_CATEGORY_PAYLOAD = "unknown_category_payload"
EXCESS_FSPEC_BIT = "excess_fspec_bit"
MISSING_DECODER = "missing_decoder"
DECODE_ERROR = "decode_error"
OVERFLOW = "overflow"
TAIL = "tail"


@dataclass(frozen=True)
class Record:
    """Unified record model for decoded ASTERIX data."""
    category: int
    length: int  # Declared length, header included
    fspec_hex: str
    # Record start inside the decoded buffer; not part of record equality
    block_offset: int = field(compare=False)
    items: Dict[str, Any] = field(default_factory=dict)
    diagnostics: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_complete(self) -> bool:
        """True when every byte of the record was understood."""
        return not self.diagnostics

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "length": self.length,
            "fspec_hex": self.fspec_hex,
            "block_offset": self.block_offset,
            "items": self.items,
            "diagnostics": self.diagnostics,
        }
