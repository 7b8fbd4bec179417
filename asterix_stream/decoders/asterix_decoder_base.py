from abc import ABC, abstractmethod
import logging
from typing import Dict, Sequence, Tuple

from asterix_stream.config import DEFAULT_SCALING, ScalingConfig
from asterix_stream.decoders.item_decoder_table import ItemDecoder
from asterix_stream.errors import ItemTruncatedError
from asterix_stream.models.record import Record
from asterix_stream.types.enums import Category


class AsterixDecoderBase(ABC):
    def __init__(self) -> None:
        # Initialize a per-instance logger; subclasses should call super().__init__()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    def decode_record(self, data: Sequence[int], offset: int) -> Tuple[Record, int]:
        pass


class ItemDecoderSet(ABC):
    """Item decoders of one category, exposed as `decoder_map` (item id -> callable)."""

    category: Category

    def __init__(self, scaling: ScalingConfig = DEFAULT_SCALING) -> None:
        self.scaling = scaling
        self.decoder_map = self._build_decoder_map()

    @abstractmethod
    def _build_decoder_map(self) -> Dict[str, ItemDecoder]:
        pass

    @staticmethod
    def _require(data: Sequence[int], pos: int, size: int, item_id: str) -> None:
        if pos + size > len(data):
            raise ItemTruncatedError(item_id, f"needs {size} bytes at offset {pos}")
