"""Load a compiled Java API surface from a jar/zip archive or a directory.

Every ``.class`` entry is decoded with :func:`parse_class_file` and the
resulting classes are grouped by package.  Packages and the types inside
them are sorted by name so that two loads of the same input produce
identical models.

Typical usage::

    model = load_archive(Path("library-1.2.jar"))
"""

from __future__ import annotations

import logging
import zipfile
import zlib
from collections import defaultdict
from collections.abc import Iterator
from pathlib import Path

from apidiff_core.loader.class_reader import ClassFormatError, parse_class_file
from apidiff_core.models.bytecode import ApiModel, ClassInfo, PackageInfo

logger = logging.getLogger(__name__)

_CLASS_SUFFIX = ".class"

# module-info declares a module, not a type.
_SKIPPED_NAMES: frozenset[str] = frozenset({"module-info.class"})

# Multi-release jars keep per-version overrides here; only the base
# entries describe the API.
_MULTI_RELEASE_PREFIX = "META-INF/versions/"


class ArchiveLoadError(Exception):
    """Raised when an archive cannot be read or one of its classes cannot be decoded."""


def _is_api_entry(entry_name: str) -> bool:
    if not entry_name.endswith(_CLASS_SUFFIX):
        return False
    if entry_name.startswith(_MULTI_RELEASE_PREFIX):
        logger.debug("Skipping multi-release entry %s", entry_name)
        return False
    if entry_name.rsplit("/", 1)[-1] in _SKIPPED_NAMES:
        logger.debug("Skipping %s", entry_name)
        return False
    return True


def _iter_zip_entries(path: Path) -> Iterator[tuple[str, bytes]]:
    try:
        with zipfile.ZipFile(path) as archive:
            for info in archive.infolist():
                if info.is_dir() or not _is_api_entry(info.filename):
                    continue
                try:
                    data = archive.read(info)
                except (zlib.error, EOFError, NotImplementedError, RuntimeError) as exc:
                    # Corrupt deflate stream, unsupported compression or encrypted entry.
                    raise ArchiveLoadError(f"{path}: cannot read entry {info.filename}: {exc}") from exc
                yield info.filename, data
    except zipfile.BadZipFile as exc:
        raise ArchiveLoadError(f"Not a valid jar/zip archive: {path}") from exc
    except OSError as exc:
        raise ArchiveLoadError(f"Cannot read archive {path}: {exc}") from exc


def _iter_directory_entries(root: Path) -> Iterator[tuple[str, bytes]]:
    for class_path in sorted(root.rglob(f"*{_CLASS_SUFFIX}")):
        entry_name = class_path.relative_to(root).as_posix()
        if not class_path.is_file() or not _is_api_entry(entry_name):
            continue
        try:
            yield entry_name, class_path.read_bytes()
        except OSError as exc:
            raise ArchiveLoadError(f"Cannot read class file {class_path}: {exc}") from exc


def group_by_package(classes: list[ClassInfo]) -> list[PackageInfo]:
    """Group *classes* into packages, sorting packages and types by name."""
    grouped: dict[str, list[ClassInfo]] = defaultdict(list)
    for cls in classes:
        grouped[cls.package_name].append(cls)

    return [
        PackageInfo(name=name, types=sorted(grouped[name], key=lambda c: c.name))
        for name in sorted(grouped)
    ]


def load_archive(path: Path | str) -> ApiModel:
    """Load every class in *path* into an :class:`ApiModel`.

    Parameters
    ----------
    path:
        A jar/zip file, or a directory holding extracted ``.class`` files.

    Raises
    ------
    ArchiveLoadError
        If *path* does not exist, is not a readable archive, or contains
        a class file that cannot be decoded.
    """
    path = Path(path)
    if not path.exists():
        raise ArchiveLoadError(f"Archive not found: {path}")

    entries = _iter_directory_entries(path) if path.is_dir() else _iter_zip_entries(path)

    classes: list[ClassInfo] = []
    for entry_name, data in entries:
        try:
            classes.append(parse_class_file(data))
        except ClassFormatError as exc:
            raise ArchiveLoadError(f"{path}: cannot decode {entry_name}: {exc}") from exc

    packages = group_by_package(classes)
    logger.info("Loaded %d types in %d packages from %s", len(classes), len(packages), path)
    return ApiModel(source=str(path), packages=packages)
