from functools import partial
from typing import Callable, Dict, Optional, Sequence, Tuple

from asterix_stream.config import DEFAULT_SCALING, ScalingConfig
from asterix_stream.errors import BufferBoundsError, ItemTruncatedError
from asterix_stream.models.item import DecodedItem
from asterix_stream.utils.byte_primitives import read_fx_chain

# (data, pos) -> DecodedItem, raises ItemTruncatedError
ItemDecoder = Callable[[Sequence[int], int], DecodedItem]


def decode_fx_chain_raw(data: Sequence[int], pos: int, item_id: str) -> DecodedItem:
    """Variable-length item whose sub-fields are not decoded: keep the octets as hex."""
    try:
        octets = read_fx_chain(data, pos)
    except BufferBoundsError as exc:
        raise ItemTruncatedError(item_id, "FX chain runs past end of buffer") from exc
    return DecodedItem(value={"raw": octets.hex()}, length=len(octets))


def fx_chain_raw_decoder(item_id: str) -> ItemDecoder:
    return partial(decode_fx_chain_raw, item_id=item_id)


class ItemDecoderTable:
    """(category, item identifier) -> item decoder."""

    def __init__(self) -> None:
        self._decoders: Dict[Tuple[int, str], ItemDecoder] = {}

    def register_decoder(self, category: int, item_id: str, decoder: ItemDecoder) -> None:
        if not callable(decoder):
            raise TypeError(f"Decoder for {item_id} must be callable")
        self._decoders[(int(category), item_id)] = decoder

    def register_decoders(self, category: int, decoders: Dict[str, ItemDecoder]) -> None:
        for item_id, decoder in decoders.items():
            self.register_decoder(category, item_id, decoder)

    def lookup(self, category: int, item_id: str) -> Optional[ItemDecoder]:
        return self._decoders.get((category, item_id))

    def __contains__(self, key: Tuple[int, str]) -> bool:
        return key in self._decoders

    def __len__(self) -> int:
        return len(self._decoders)


def default_decoder_table(scaling: ScalingConfig = DEFAULT_SCALING) -> ItemDecoderTable:
    # Local imports: the item decoder sets import fx_chain_raw_decoder from here
    from asterix_stream.decoders.cat034_decoder import Cat034ItemDecoders
    from asterix_stream.decoders.cat048_decoder import Cat048ItemDecoders

    table = ItemDecoderTable()
    for decoder_set in (Cat034ItemDecoders(scaling), Cat048ItemDecoders(scaling)):
        table.register_decoders(decoder_set.category.value, decoder_set.decoder_map)
    return table
