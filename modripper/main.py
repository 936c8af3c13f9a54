import argparse
import logging
import os
import sys
from dataclasses import dataclass, field
from functools import partial
from multiprocessing import Pool
from typing import Optional

from modripper import settings
from modripper.core.errors import DecodeError
from modripper.core.utilities import profile
from modripper.formats.dispatcher import extract_module
from modripper.audio.wav import write_wav

logger = logging.getLogger(__name__)


# what happened to one input file, printed by the parent process
@dataclass
class RipReport:
    path: str
    title: str = ""
    sample_count: int = 0
    written: list[str] = field(default_factory=list)
    failed: list[tuple[str, str]] = field(default_factory=list)  # (title, reason)
    error: Optional[str] = None

    def show(self):
        if self.error is not None:
            print("Error:", self.path, self.error)
            return
        print("Title:", self.title, "Samples:", self.sample_count)
        for path in self.written:
            print("Wrote wav:", path)
        for title, reason in self.failed:
            print("Error:", title, reason)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="modripper",
        description="Extract the samples of ProTracker (.mod) and FastTracker 2 (.xm) modules as .wav files.")
    parser.add_argument("files", nargs="+", help="module files to rip")
    parser.add_argument("-o", "--output-dir", default=settings.OUTPUT_DIR,
                        help="directory the .wav files are written to (default: %(default)s)")
    parser.add_argument("--lenient", dest="lenient", action="store_true",
                        help="rip whatever a truncated module still holds (default: %s)" % settings.LENIENT)
    parser.add_argument("--strict", dest="lenient", action="store_false",
                        help="report truncated modules as malformed and write nothing for them")
    parser.add_argument("-j", "--jobs", type=int, default=settings.JOBS,
                        help="number of files ripped in parallel (default: %(default)s)")
    parser.add_argument("--profile", action="store_true", default=settings.USE_PROFILER,
                        help="print a pyinstrument profile when done")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug output")
    parser.set_defaults(lenient=settings.LENIENT)
    return parser.parse_args(argv)


# the whole file is decoded from memory
def read_module(path: str) -> bytes:
    with open(path, "rb") as f:
        return f.read()


# decode one module and write its samples. An input that can't be opened raises,
# a malformed module or a sample that can't be written only ends up in the report
def rip_file(path: str, output_dir: str = ".", lenient: bool = False) -> RipReport:
    report = RipReport(path)
    data = read_module(path)

    try:
        report.title, samples = extract_module(path, data, lenient=lenient)
    except DecodeError as e:
        report.error = f"malformed input: {e}"
        return report

    report.sample_count = len(samples)
    for sample in samples:
        try:
            report.written.append(write_wav(sample, output_dir))
        except (OSError, ValueError) as e:
            # ValueError: a title with a null byte in it is no valid file name
            logger.debug("could not write %s", sample.title, exc_info=True)
            report.failed.append((sample.title, str(e)))
    return report


@profile
def run(files: list[str], output_dir: str = ".", lenient: bool = False, jobs: int = 1) -> list[RipReport]:
    os.makedirs(output_dir, exist_ok=True)
    rip = partial(rip_file, output_dir=output_dir, lenient=lenient)

    reports = []
    if jobs > 1 and len(files) > 1:
        with Pool(min(jobs, len(files))) as pool:
            for report in pool.imap(rip, files):
                report.show()
                reports.append(report)
    else:
        for path in files:
            report = rip(path)
            report.show()
            reports.append(report)
    return reports


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else settings.LOG_LEVEL,
                        format="%(levelname)s %(name)s: %(message)s")
    settings.USE_PROFILER = args.profile

    try:
        run(args.files, args.output_dir, args.lenient, args.jobs)
    except OSError as e:
        # an input that can't be read ends the whole run
        print("Error:", e, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
