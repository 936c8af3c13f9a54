from __future__ import annotations
from dataclasses import dataclass, field
from numpy.typing import NDArray
import numpy as np


@dataclass
class Sample:  # holds one extracted instrument sound
    title: str  # module title + separator + sample name, used for the file name
    length: int  # length of the waveform in bytes
    data: bytes = field(default=b"", repr=False)  # the raw PCM bytes, empty until the payload is read
    name: str = ""  # sample name as stored in the module
    finetune: int = 0  # finetune value for dropping or lifting the pitch
    volume: int = 64  # volume
    loop_start: int = 0  # no of bytes from the start of the sample
    loop_length: int = 0  # no of bytes in the loop
    bits: int = 8  # 8 or 16 bit signed PCM

    # the waveform as signed integers
    def as_array(self) -> NDArray:
        if self.bits == 16:
            usable = len(self.data) - len(self.data) % 2
            return np.frombuffer(self.data[:usable], dtype="<i2")
        return np.frombuffer(self.data, dtype=np.int8)


@dataclass
class ModuleHeader:  # everything in a .MOD file that comes before the pattern data
    title: str
    samples: list[Sample]  # the slots that hold a sample, in file order
    song_length: int  # number of valid entries in the pattern order table
    pattern_order: list[int]

    @property
    def pattern_count(self) -> int:
        # patterns start at 0
        return max(self.pattern_order, default=0) + 1


@dataclass
class XMHeader:  # the fixed part of an .XM file
    title: str
    tracker_name: str
    version: int
    header_size: int  # counted from the header size field itself
    song_length: int
    restart_position: int
    channel_count: int
    pattern_count: int
    instrument_count: int
    flags: int
    tempo: int
    bpm: int
    pattern_order: list[int]


@dataclass
class XMInstrument:  # an instrument header and the sample headers it owns
    name: str
    samples: list[Sample] = field(default_factory=list)  # every header, empty ones included
