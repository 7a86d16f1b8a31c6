"""
File id codec.

A file id addresses one object on a volume server and looks like
``3,01637037d6`` or, with a generation suffix, ``3,5442434343_2``.
"""

import re
from dataclasses import dataclass
from typing import Optional

from .errors import MalformedHandle

U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1

_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class FileId:
    volume_id: int
    key: str
    generation: Optional[int] = None

    @classmethod
    def parse(cls, text: str) -> "FileId":
        return parse_fid(text)

    def __str__(self) -> str:
        return format_fid(self)


def format_fid(fid: FileId) -> str:
    text = f"{fid.volume_id},{fid.key}"
    if fid.generation is not None:
        text += f"_{fid.generation}"
    return text


def _parse_uint(text: str, limit: int, what: str, source: str) -> int:
    if not _DIGITS.fullmatch(text):
        raise MalformedHandle(f"{what} is not an unsigned integer", fid=source)
    value = int(text)
    if value > limit:
        raise MalformedHandle(f"{what} out of range", fid=source)
    return value


def parse_fid(text: str) -> FileId:
    """
    Parse the canonical text form of a file id.

    Args:
        text: File id such as "3,01637037d6" or "3,5442434343_2"

    Returns:
        FileId: The parsed file id

    Raises:
        MalformedHandle: If the volume id, key or generation is missing or invalid
    """
    volume_part, sep, rest = text.partition(",")
    if not sep:
        raise MalformedHandle("Missing file key", fid=text)

    volume_id = _parse_uint(volume_part, U32_MAX, "volume id", text)

    key, sep, generation_part = rest.partition("_")
    if not key:
        raise MalformedHandle("Missing file key", fid=text)

    generation = None
    if sep:
        generation = _parse_uint(generation_part, U64_MAX, "generation", text)

    return FileId(volume_id=volume_id, key=key, generation=generation)
