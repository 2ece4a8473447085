"""Class-file decoding and archive loading."""

from apidiff_core.loader.archive_loader import ArchiveLoadError, group_by_package, load_archive
from apidiff_core.loader.class_reader import (
    ClassFormatError,
    decode_modified_utf8,
    parse_class_file,
)

__all__ = [
    "ArchiveLoadError",
    "ClassFormatError",
    "decode_modified_utf8",
    "group_by_package",
    "load_archive",
    "parse_class_file",
]
