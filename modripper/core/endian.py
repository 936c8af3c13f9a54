# Fixed-width field decoding. A field of the wrong width decodes to 0,
# which is what a short read at the end of a truncated module produces.


def big_endian_u16(data: bytes) -> int:
    if len(data) != 2:
        return 0
    return int.from_bytes(data, "big", signed=False)


def little_endian_u16(data: bytes) -> int:
    if len(data) != 2:
        return 0
    return int.from_bytes(data, "little", signed=False)


def little_endian_u32(data: bytes) -> int:
    if len(data) != 4:
        return 0
    return int.from_bytes(data, "little", signed=False)


# drops the null padding ProTracker puts in and behind names
def to_string(data: bytes) -> str:
    return data.translate(None, b"\0").decode("CP437")
