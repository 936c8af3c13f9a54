import logging

import numpy as np

from modripper.core.types import Sample, XMHeader, XMInstrument
from modripper.core.cursor import ByteCursor
from modripper.core.constants import XM_MAGIC, TITLE_SEPARATOR, MIN_SAMPLE_LENGTH

logger = logging.getLogger(__name__)

# field sizes:
SONGNAME_LEN = 20
TRACKERNAME_LEN = 20
PATTERNPOS_LEN = 256
HEADER_FIXED_LEN = 276      # header size field up to the end of the order table
# ----
PATTERN_HEADER_LEN = 9
# ----
INSTRUMENTNAME_LEN = 22
INSTRUMENT_HEADER_LEN = 29  # size field, name, type, sample count
INSTRUMENT_EXTENDED_LEN = 33    # ... plus the sample header size field
# ----
SAMPLENAME_LEN = 22
SAMPLE_HEADER_LEN = 40
SAMPLE_16BIT = 0x10


# ---- the loader class:

# walks an .XM buffer: header, patterns, then the instruments and their samples
class XMParser:
    def __init__(self):
        self.title = ""

    # public method
    def parse(self, cursor: ByteCursor) -> list[Sample]:
        magic = cursor.take(min(len(XM_MAGIC), cursor.remaining_len()))
        if magic != XM_MAGIC:
            logger.warning("not an extended module, magic is %r", magic)
            return []

        header = self._readHeader(cursor)
        self.title = header.title
        self._skipPatterns(cursor, header.pattern_count)

        sample_array = []
        for i in range(header.instrument_count):
            instrument = self._readInstrument(cursor, header.title)
            self._loadSampleData(cursor, instrument)
            sample_array += [s for s in instrument.samples
                             if s.length >= MIN_SAMPLE_LENGTH and s.title.strip()]

        logger.info("Title: %s Samples: %d", header.title, len(sample_array))
        return sample_array

    # private methods:
    # ---- file operations
    @staticmethod
    def _toString(data: bytes) -> str:
        return data.decode("CP437").rstrip(" \0")

    # the rest of a block whose size is declared in the file
    @staticmethod
    def _skipRemainder(cursor: ByteCursor, declared: int, consumed: int):
        if declared > consumed:
            cursor.skip(declared - consumed)

    # undo the delta coding, every stored value is the difference to the previous one.
    # numpy wraps the running sum at the sample width, the same way the tracker does
    @staticmethod
    def _decodeDeltas(raw: bytes, bits: int) -> bytes:
        if bits == 16:
            usable = len(raw) - len(raw) % 2
            deltas = np.frombuffer(raw[:usable], dtype="<i2")
            return np.cumsum(deltas, dtype=np.int16).astype("<i2").tobytes()
        deltas = np.frombuffer(raw, dtype=np.int8)
        return np.cumsum(deltas, dtype=np.int8).tobytes()

    # ---- data structure operations

    def _readHeader(self, cursor: ByteCursor) -> XMHeader:
        # XM pads its titles with spaces
        title = cursor.take(SONGNAME_LEN).decode("CP437").strip(" ")
        cursor.skip(1)  # 0x1A
        tracker_name = self._toString(cursor.take(TRACKERNAME_LEN))
        version = cursor.take_le_u16()
        header_size = cursor.take_le_u32()
        song_length = cursor.take_le_u16()
        restart_position = cursor.take_le_u16()
        channel_count = cursor.take_le_u16()
        pattern_count = cursor.take_le_u16()
        instrument_count = cursor.take_le_u16()
        flags = cursor.take_le_u16()
        tempo = cursor.take_le_u16()
        bpm = cursor.take_le_u16()
        pattern_order = list(cursor.take(PATTERNPOS_LEN))[0:song_length]
        self._skipRemainder(cursor, header_size, HEADER_FIXED_LEN)

        logger.debug("%s (v%04x): %d channels, %d patterns, %d instruments",
                     tracker_name, version, channel_count, pattern_count, instrument_count)
        return XMHeader(title, tracker_name, version, header_size, song_length, restart_position,
                        channel_count, pattern_count, instrument_count, flags, tempo, bpm, pattern_order)

    # patterns are packed and vary in size, each one declares its length
    def _skipPatterns(self, cursor: ByteCursor, pattern_count: int):
        for i in range(pattern_count):
            header_len = cursor.take_le_u32()
            cursor.skip(1)  # packing type
            cursor.skip(2)  # row count
            data_len = cursor.take_le_u16()
            self._skipRemainder(cursor, header_len, PATTERN_HEADER_LEN)
            cursor.skip(data_len)

    def _readInstrument(self, cursor: ByteCursor, module_title: str) -> XMInstrument:
        header_len = cursor.take_le_u32()
        instrument = XMInstrument(self._toString(cursor.take(INSTRUMENTNAME_LEN)))
        cursor.skip(1)  # instrument type, always 0
        sample_count = cursor.take_le_u16()

        if sample_count == 0:
            self._skipRemainder(cursor, header_len, INSTRUMENT_HEADER_LEN)
            return instrument

        sample_header_len = cursor.take_le_u32()
        # keymap, envelopes, vibrato and fadeout
        self._skipRemainder(cursor, header_len, INSTRUMENT_EXTENDED_LEN)

        for i in range(sample_count):
            instrument.samples.append(self._readSampleHeader(cursor, module_title, instrument.name))
            self._skipRemainder(cursor, sample_header_len, SAMPLE_HEADER_LEN)
        return instrument

    def _readSampleHeader(self, cursor: ByteCursor, module_title: str, instrument_name: str) -> Sample:
        length = cursor.take_le_u32()
        loop_start = cursor.take_le_u32()
        loop_length = cursor.take_le_u32()
        volume = cursor.take_u8()
        finetune = int.from_bytes(cursor.take(1), "little", signed=True)
        sample_type = cursor.take_u8()
        cursor.skip(1)  # panning
        cursor.skip(1)  # relative note
        cursor.skip(1)  # reserved
        name = self._toString(cursor.take(SAMPLENAME_LEN))

        title = module_title + TITLE_SEPARATOR + (name or instrument_name)
        bits = 16 if sample_type & SAMPLE_16BIT else 8
        return Sample(title, length, name=name, finetune=finetune, volume=volume,
                      loop_start=loop_start, loop_length=loop_length, bits=bits)

    # sample payloads follow all the sample headers of their instrument
    def _loadSampleData(self, cursor: ByteCursor, instrument: XMInstrument):
        for sample in instrument.samples:
            sample.data = self._decodeDeltas(cursor.take(sample.length), sample.bits)
            sample.length = len(sample.data)


def decode_fasttracker(cursor: ByteCursor) -> list[Sample]:
    return XMParser().parse(cursor)
