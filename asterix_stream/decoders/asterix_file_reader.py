import mmap
from typing import Iterator, Optional

from asterix_stream.config import DecoderConfig
from asterix_stream.decoders.stream_decoder import AsterixStreamDecoder
from asterix_stream.models.record import Record


class AsterixFileReader:
    def __init__(self, file_path: str, config: Optional[DecoderConfig] = None):
        self.file_path = file_path
        self.stream_decoder = AsterixStreamDecoder(config)

    def read_records(self) -> Iterator[Record]:
        """Efficiently read Asterix records using memory mapping."""
        with open(self.file_path, 'rb') as file:
            # mmap cannot map an empty file
            if not file.read(1):
                return
            with mmap.mmap(file.fileno(), 0, access=mmap.ACCESS_READ) as mmapped_file:
                yield from self.stream_decoder.decode(mmapped_file)
