import logging
import os
from enum import Enum
from typing import Optional

from modripper.core.types import Sample
from modripper.core.cursor import ByteCursor
from modripper.core.constants import MOD_EXTENSION, XM_EXTENSION
from modripper.formats.protracker import ModParser
from modripper.formats.fasttracker import XMParser

logger = logging.getLogger(__name__)


class ModuleFormat(Enum):
    MOD = MOD_EXTENSION
    XM = XM_EXTENSION


PARSERS = {
    ModuleFormat.MOD: ModParser,
    ModuleFormat.XM: XMParser,
}


# picks the format from the file extension, case doesn't matter
def module_format(filename: str) -> Optional[ModuleFormat]:
    extension = os.path.splitext(filename)[1].lstrip(".").lower()
    try:
        return ModuleFormat(extension)
    except ValueError:
        return None


# the module title and its samples, ("", []) for a format we don't know
def extract_module(filename: str, data: bytes, lenient: bool = False) -> tuple[str, list[Sample]]:
    fmt = module_format(filename)
    if fmt is None:
        logger.warning("%s: unknown module format, skipping", filename)
        return "", []

    logger.debug("%s: decoding as %s", filename, fmt.name)
    parser = PARSERS[fmt]()
    samples = parser.parse(ByteCursor(data, lenient=lenient))
    return parser.title, samples


def extract_samples(filename: str, data: bytes, lenient: bool = False) -> list[Sample]:
    return extract_module(filename, data, lenient)[1]
