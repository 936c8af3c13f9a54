import os
import struct

from modripper.core.types import Sample
from modripper.core.constants import WavFormat, DEFAULT_WAV_FORMAT

CHUNK_HEADER = struct.Struct("<4sI")
FORMAT_BODY = struct.Struct("<HHIIHH")


# ---- chunk builders
def format_chunk(fmt: WavFormat) -> bytes:
    body = FORMAT_BODY.pack(fmt.compression, fmt.channels, fmt.sample_rate,
                            fmt.byte_rate, fmt.block_align, fmt.bits_per_sample)
    return CHUNK_HEADER.pack(b"fmt ", len(body)) + body


def data_chunk(data: bytes) -> bytes:
    return CHUNK_HEADER.pack(b"data", len(data)) + data


def riff_header(data_len: int, format_len: int) -> bytes:
    # the size covers the format chunk, the payload and the two 4-byte fields around it
    return CHUNK_HEADER.pack(b"RIFF", data_len + format_len + 8) + b"WAVE"


# ---- the container
def build_wav(sample: Sample, fmt: WavFormat = DEFAULT_WAV_FORMAT) -> bytes:
    fmt_chunk = format_chunk(fmt)
    return riff_header(len(sample.data), len(fmt_chunk)) + fmt_chunk + data_chunk(sample.data)


def wav_filename(sample: Sample) -> str:
    return sample.title + ".wav"


# writes <title>.wav, an existing file of the same name is replaced
def write_wav(sample: Sample, output_dir: str = ".", fmt: WavFormat = DEFAULT_WAV_FORMAT) -> str:
    path = os.path.join(output_dir, wav_filename(sample))
    with open(path, "wb") as f:
        f.write(build_wav(sample, fmt))
    return path


# returns the payload of the "data" chunk, or None if there is none
def read_data_chunk(blob: bytes):
    offset = 12     # RIFF, size, WAVE
    while offset + CHUNK_HEADER.size <= len(blob):
        chunk_id, size = CHUNK_HEADER.unpack_from(blob, offset)
        offset += CHUNK_HEADER.size
        if chunk_id == b"data":
            return blob[offset:offset + size]
        offset += size
    return None
