from dataclasses import dataclass

TITLE_SEPARATOR = " - "
MIN_SAMPLE_LENGTH = 2     # anything shorter is an empty slot

# ---- ProTracker
MOD_EXTENSION = "mod"
SAMPLE_SLOT_COUNT = 31
PATTERN_SIZE = 1024       # 64 rows * 4 channels * 4 bytes

# ---- FastTracker 2
XM_EXTENSION = "xm"
XM_MAGIC = b"Extended Module: "


# presets for the RIFF container, not read from the module
@dataclass(frozen=True)     # immutable
class WavFormat:
    compression: int = 1        # PCM
    channels: int = 1
    sample_rate: int = 18042
    byte_rate: int = 36010
    block_align: int = 2
    bits_per_sample: int = 16


DEFAULT_WAV_FORMAT = WavFormat()
