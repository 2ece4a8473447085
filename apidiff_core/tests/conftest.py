"""Shared fixtures for apidiff_core tests.

``class_file_factory`` assembles real class-file bytes so that the reader
and the archive loader are exercised against the binary format rather than
against mocks.  ``jar_factory`` writes those bytes into a jar on disk.
"""

from __future__ import annotations

import struct
import zipfile
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

import pytest


@dataclass
class MethodSpec:
    name: str
    descriptor: str
    code: bytes | None = None
    access_flags: int = 0x0001
    extra_attributes: list[str] = field(default_factory=list)


class _PoolBuilder:
    """Collects constant pool entries, de-duplicating by value."""

    def __init__(self) -> None:
        self._entries: list[bytes] = []
        self._index: dict[tuple[int, object], int] = {}
        self._next = 1

    @property
    def count(self) -> int:
        return self._next

    def _add(self, key: tuple[int, object], payload: bytes, *, wide: bool = False) -> int:
        if key in self._index:
            return self._index[key]
        index = self._next
        self._entries.append(payload)
        self._next += 2 if wide else 1
        self._index[key] = index
        return index

    def utf8(self, value: str, raw: bytes | None = None) -> int:
        encoded = raw if raw is not None else value.encode("utf-8")
        return self._add((1, value), bytes([1]) + struct.pack(">H", len(encoded)) + encoded)

    def class_ref(self, name: str) -> int:
        name_index = self.utf8(name)
        return self._add((7, name), bytes([7]) + struct.pack(">H", name_index))

    def long(self, value: int) -> int:
        return self._add((5, value), bytes([5]) + struct.pack(">q", value), wide=True)

    def string(self, value: str) -> int:
        utf8_index = self.utf8(value)
        return self._add((8, value), bytes([8]) + struct.pack(">H", utf8_index))

    def serialise(self) -> bytes:
        return b"".join(self._entries)


def build_class_file(
    name: str,
    methods: list[MethodSpec] | None = None,
    *,
    access_flags: int = 0x0021,
    super_name: str | None = "java/lang/Object",
    interfaces: list[str] | None = None,
    field_names: list[str] | None = None,
) -> bytes:
    """Assemble a minimal but well-formed class file."""
    methods = methods or []
    pool = _PoolBuilder()

    this_index = pool.class_ref(name)
    super_index = pool.class_ref(super_name) if super_name else 0
    interface_indices = [pool.class_ref(i) for i in interfaces or []]
    # Wide and string constants so the reader has to skip them correctly.
    pool.long(42)
    pool.string("hello")

    field_parts: list[bytes] = []
    for field_name in field_names or []:
        cv_index = pool.utf8("ConstantValue")
        value_index = pool.long(7)
        field_parts.append(
            struct.pack(">HHH", 0x0019, pool.utf8(field_name), pool.utf8("J"))
            + struct.pack(">H", 1)
            + struct.pack(">HIH", cv_index, 2, value_index)
        )

    method_parts: list[bytes] = []
    for spec in methods:
        attributes: list[bytes] = []
        for attr_name in spec.extra_attributes:
            attributes.append(struct.pack(">HI", pool.utf8(attr_name), 0))
        if spec.code is not None:
            body = (
                struct.pack(">HHI", 2, 1, len(spec.code))
                + spec.code
                + struct.pack(">H", 0)  # exception_table_length
                + struct.pack(">H", 0)  # attributes_count
            )
            attributes.append(struct.pack(">HI", pool.utf8("Code"), len(body)) + body)
        method_parts.append(
            struct.pack(">HHH", spec.access_flags, pool.utf8(spec.name), pool.utf8(spec.descriptor))
            + struct.pack(">H", len(attributes))
            + b"".join(attributes)
        )

    return (
        b"\xca\xfe\xba\xbe"
        + struct.pack(">HH", 0, 52)
        + struct.pack(">H", pool.count)
        + pool.serialise()
        + struct.pack(">HHH", access_flags, this_index, super_index)
        + struct.pack(">H", len(interface_indices))
        + b"".join(struct.pack(">H", i) for i in interface_indices)
        + struct.pack(">H", len(field_parts))
        + b"".join(field_parts)
        + struct.pack(">H", len(method_parts))
        + b"".join(method_parts)
        + struct.pack(">H", 0)  # class attributes_count
    )


@pytest.fixture
def class_file_factory() -> Callable[..., bytes]:
    return build_class_file


@pytest.fixture
def method_spec() -> type[MethodSpec]:
    return MethodSpec


@pytest.fixture
def jar_factory(tmp_path: Path) -> Callable[[str, dict[str, bytes]], Path]:
    """Write ``{entry_name: data}`` into ``tmp_path/<filename>`` as a jar."""

    def _make(filename: str, entries: dict[str, bytes]) -> Path:
        jar_path = tmp_path / filename
        with zipfile.ZipFile(jar_path, "w", zipfile.ZIP_DEFLATED) as jar:
            jar.writestr("META-INF/MANIFEST.MF", "Manifest-Version: 1.0\n")
            for entry_name, data in entries.items():
                jar.writestr(entry_name, data)
        return jar_path

    return _make
