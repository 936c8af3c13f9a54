import unittest

from modripper.core.cursor import ByteCursor
from modripper.core.errors import TruncatedInputError
from modripper.core.types import ModuleHeader
from modripper.formats.protracker import decode_protracker

from modbuilder import build_mod

KICK = bytes(range(16))
SNARE = bytes(range(100, 140))


def decode(data: bytes, lenient: bool = False):
    return decode_protracker(ByteCursor(data, lenient=lenient))


class TestProTrackerDecoder(unittest.TestCase):
    def test_samples_in_slot_order(self) -> None:
        samples = decode(build_mod(b"demo", [(b"kick", KICK), (b"snare", SNARE)]))

        self.assertEqual([s.title for s in samples], ["demo - kick", "demo - snare"])
        self.assertEqual([s.data for s in samples], [KICK, SNARE])
        for sample in samples:
            self.assertEqual(len(sample.data), sample.length)
            self.assertEqual(sample.length % 2, 0)

    def test_null_padding_is_removed(self) -> None:
        samples = decode(build_mod(b"de\0mo", [(b"\0kick", KICK)]))
        self.assertEqual(samples[0].title, "demo - kick")
        self.assertEqual(samples[0].name, "kick")

    def test_zero_length_slot_is_dropped(self) -> None:
        samples = decode(build_mod(b"demo", [(b"has a name", b""), (b"snare", SNARE)]))
        self.assertEqual(len(samples), 1)
        self.assertEqual(samples[0].title, "demo - snare")
        self.assertEqual(samples[0].data, SNARE)

    def test_unnamed_sample_is_kept(self) -> None:
        samples = decode(build_mod(b"demo", [(b"", KICK)]))
        self.assertEqual(samples[0].title, "demo - ")
        self.assertEqual(samples[0].data, KICK)

    def test_duplicate_titles_are_distinct_entries(self) -> None:
        samples = decode(build_mod(b"demo", [(b"hat", KICK), (b"hat", SNARE)]))
        self.assertEqual([s.title for s in samples], ["demo - hat", "demo - hat"])
        self.assertEqual([s.data for s in samples], [KICK, SNARE])

    def test_highest_pattern_in_order_table_is_skipped(self) -> None:
        module = build_mod(b"demo", [(b"kick", KICK)], order=(0, 2, 1, 2, 0))
        # title, slots, song length, unused byte, order table, three patterns
        self.assertEqual(len(module), 20 + 31 * 30 + 2 + 133 + 3 * 1024 + len(KICK))
        self.assertEqual(decode(module)[0].data, KICK)

    def test_only_song_length_entries_count(self) -> None:
        module = build_mod(b"demo", [(b"kick", KICK)], order=(0, 5), song_length=1)
        self.assertEqual(decode(module)[0].data, KICK)

    def test_pattern_count(self) -> None:
        self.assertEqual(ModuleHeader("t", [], 5, [0, 2, 1, 2, 0]).pattern_count, 3)
        self.assertEqual(ModuleHeader("t", [], 0, []).pattern_count, 1)

    def test_slot_metadata(self) -> None:
        samples = decode(build_mod(b"demo", [(b"pad", KICK, 0x0F, 48, 4, 8)]))
        self.assertEqual(samples[0].finetune, 15)
        self.assertEqual(samples[0].volume, 48)
        self.assertEqual(samples[0].loop_start, 4)
        self.assertEqual(samples[0].loop_length, 8)
        self.assertEqual(samples[0].bits, 8)

    def test_as_array_is_signed(self) -> None:
        samples = decode(build_mod(b"demo", [(b"saw", b"\x00\x7f\x80\xff")]))
        self.assertEqual(samples[0].as_array().tolist(), [0, 127, -128, -1])

    def test_truncated_module_raises(self) -> None:
        module = build_mod(b"demo", [(b"kick", KICK)])
        with self.assertRaises(TruncatedInputError):
            decode(module[:-1])

    def test_truncated_module_lenient(self) -> None:
        module = build_mod(b"demo", [(b"kick", KICK), (b"snare", SNARE)])
        samples = decode(module[:-4], lenient=True)
        self.assertEqual(len(samples), 2)
        self.assertEqual(samples[0].data, KICK)
        self.assertEqual(samples[1].data, SNARE[:-4])
        for sample in samples:
            self.assertEqual(sample.length, len(sample.data))

    def test_sample_cut_below_two_bytes_is_dropped(self) -> None:
        module = build_mod(b"demo", [(b"kick", KICK), (b"snare", SNARE)])
        samples = decode(module[:-(len(SNARE) - 1)], lenient=True)
        self.assertEqual([s.title for s in samples], ["demo - kick"])

    def test_standard_layout_lenient(self) -> None:
        # one byte less before the patterns than this decoder reads
        module = build_mod(b"demo", [(b"kick", KICK), (b"snare", SNARE)], standard=True)
        with self.assertRaises(TruncatedInputError):
            decode(module)

        samples = decode(module, lenient=True)
        self.assertEqual([s.length for s in samples], [len(KICK), len(SNARE) - 1])
        self.assertEqual(samples[1].data, SNARE[1:])

    def test_empty_buffer_lenient(self) -> None:
        self.assertEqual(decode(b"", lenient=True), [])


if __name__ == "__main__":
    unittest.main()
