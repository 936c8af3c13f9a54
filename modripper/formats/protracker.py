import logging

from modripper.core.types import Sample, ModuleHeader
from modripper.core.cursor import ByteCursor
from modripper.core.endian import to_string
from modripper.core.constants import SAMPLE_SLOT_COUNT, PATTERN_SIZE, TITLE_SEPARATOR, MIN_SAMPLE_LENGTH

logger = logging.getLogger(__name__)

# field sizes, in file order:
SONGNAME_LEN = 20
# ----
SAMPLENAME_LEN = 22
# ----
UNUSED_LEN = 1
# ----
PATTERNPOS_LEN = 133    # the order table and what trails it up to the pattern data


# ---- the loader class:

# walks a .MOD buffer front to back and recovers the samples
class ModParser:
    def __init__(self):
        self.max_sample_count = SAMPLE_SLOT_COUNT
        self.title = ""

    # public method
    def parse(self, cursor: ByteCursor) -> list[Sample]:
        header = self._readHeader(cursor)
        self._skipPatternData(cursor, header.pattern_count)
        self.title = header.title
        samples = self._loadSampleData(cursor, header.samples)

        logger.info("Title: %s Samples: %d", header.title, len(samples))
        return samples

    # private methods:
    # ---- data structure operations

    def _readHeader(self, cursor: ByteCursor) -> ModuleHeader:
        title = to_string(cursor.take(SONGNAME_LEN))
        samples = self._loadSampleInfo(cursor, title)
        song_length = cursor.take_u8()
        cursor.skip(UNUSED_LEN)
        pattern_order = self._loadPatternPositions(cursor, song_length)
        return ModuleHeader(title, samples, song_length, pattern_order)

    # information about the samples, empty slots are left out
    def _loadSampleInfo(self, cursor: ByteCursor, module_title: str) -> list[Sample]:
        sample_array = []
        for i in range(self.max_sample_count):
            name = to_string(cursor.take(SAMPLENAME_LEN))
            title = module_title + TITLE_SEPARATOR + name
            length = cursor.take_be_u16() * 2
            finetune = cursor.take_u8() & 0x0F    # lower nibble
            volume = cursor.take_u8()
            loop_start = cursor.take_be_u16() * 2
            loop_length = cursor.take_be_u16() * 2

            if length >= MIN_SAMPLE_LENGTH and title.strip():
                sample_array.append(Sample(title, length, name=name, finetune=finetune, volume=volume,
                                           loop_start=loop_start, loop_length=loop_length))
            else:
                logger.debug("slot %d is empty", i + 1)
        return sample_array

    # up to 128 positions telling the tracker which pattern to play,
    # only the first song_length of them are in use
    @staticmethod
    def _loadPatternPositions(cursor: ByteCursor, song_length: int) -> list[int]:
        return list(cursor.take(PATTERNPOS_LEN))[0:song_length]

    # the note data is not needed, it only has to be stepped over
    @staticmethod
    def _skipPatternData(cursor: ByteCursor, pattern_count: int):
        logger.debug("skipping %d patterns", pattern_count)
        cursor.skip(pattern_count * PATTERN_SIZE)

    # the actual sample recordings, stored back to back in slot order.
    # A truncated module can cut the last ones short or leave them empty
    @staticmethod
    def _loadSampleData(cursor: ByteCursor, samples: list[Sample]) -> list[Sample]:
        for sample in samples:
            sample.data = cursor.take(sample.length)
            sample.length = len(sample.data)
        return [s for s in samples if s.length >= MIN_SAMPLE_LENGTH]


def decode_protracker(cursor: ByteCursor) -> list[Sample]:
    return ModParser().parse(cursor)
