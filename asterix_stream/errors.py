class AsterixError(Exception):
    """Base class for every error raised while decoding ASTERIX data."""


class StreamDesyncError(AsterixError):
    """
    Fatal error: the byte stream lost record synchronization.
    There is no safe point to resume from, so stream decoding stops here.
    """

    def __init__(self, message: str, offset: int):
        super().__init__(f"{message} at offset {offset}")
        self.offset = offset


class TruncatedHeader(StreamDesyncError):
    """Fewer than 3 bytes left for the CAT/LEN header."""

    def __init__(self, offset: int):
        super().__init__("Truncated header", offset)


class TruncatedFSPEC(StreamDesyncError):
    """FSPEC FX bit asks for another octet that is not in the buffer."""

    def __init__(self, offset: int):
        super().__init__("Truncated FSPEC", offset)


class TruncatedRecordBody(StreamDesyncError):
    """Declared record length runs past the end of the buffer."""

    def __init__(self, offset: int, declared_length: int, available: int):
        super().__init__(
            f"Truncated record body (declared {declared_length} bytes, {available} available)",
            offset,
        )
        self.declared_length = declared_length
        self.available = available


class InvalidRecordLength(StreamDesyncError):
    """Declared record length is shorter than the CAT/LEN header itself."""

    def __init__(self, offset: int, declared_length: int):
        super().__init__(f"Invalid record length {declared_length}", offset)
        self.declared_length = declared_length


class BufferBoundsError(AsterixError, IndexError):
    """A fixed-width read needs more bytes than the buffer holds."""

    def __init__(self, offset: int, size: int, buffer_length: int):
        super().__init__(
            f"Read of {size} byte(s) at offset {offset} exceeds buffer length {buffer_length}"
        )
        self.offset = offset
        self.size = size
        self.buffer_length = buffer_length


class ItemTruncatedError(AsterixError):
    """
    A single data item could not be decoded because its bytes are missing.
    Only the record decoder catches this; it becomes a record diagnostic.
    """

    def __init__(self, item_id: str, reason: str = ""):
        message = f"Truncated {item_id}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.item_id = item_id
