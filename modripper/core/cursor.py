from modripper.core.endian import big_endian_u16, little_endian_u16, little_endian_u32
from modripper.core.errors import TruncatedInputError


# a forward-only reader over one in-memory module.
# Strict cursors raise on a short read, lenient ones hand back whatever is left.
class ByteCursor:
    def __init__(self, data: bytes, lenient: bool = False):
        self._data = bytes(data)
        self._position = 0
        self.lenient = lenient

    @property
    def position(self) -> int:
        return self._position

    def remaining_len(self) -> int:
        return len(self._data) - self._position

    def take(self, n: int) -> bytes:
        available = self.remaining_len()
        if n > available and not self.lenient:
            raise TruncatedInputError(self._position, n, available)

        chunk = self._data[self._position:self._position + n]
        self._position += len(chunk)
        return chunk

    def skip(self, n: int):
        self.take(n)

    # ---- fixed-width fields
    def take_u8(self) -> int:
        data = self.take(1)
        return data[0] if data else 0

    def take_be_u16(self) -> int:
        return big_endian_u16(self.take(2))

    def take_le_u16(self) -> int:
        return little_endian_u16(self.take(2))

    def take_le_u32(self) -> int:
        return little_endian_u32(self.take(4))
