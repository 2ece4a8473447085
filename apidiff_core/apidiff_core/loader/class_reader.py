"""Minimal reader for the Java class-file format.

Only what the API diff needs is decoded: the constant pool (to resolve
names), the class access flags, this/super class, and for every method
its name, descriptor, access flags and the instruction bytes of its
``Code`` attribute.  Interfaces, fields and every other attribute are
skipped without interpretation.

Typical usage::

    with open("Foo.class", "rb") as fh:
        cls = parse_class_file(fh.read())
"""

from __future__ import annotations

import struct

from apidiff_core.models.bytecode import ClassInfo, MethodInfo

CLASS_MAGIC = b"\xca\xfe\xba\xbe"

# Constant pool tags (JVMS 4.4).
_TAG_UTF8 = 1
_TAG_CLASS = 7

# Payload size in bytes for every fixed-width constant pool entry.
_FIXED_SIZE_TAGS: dict[int, int] = {
    3: 4,  # Integer
    4: 4,  # Float
    5: 8,  # Long
    6: 8,  # Double
    7: 2,  # Class
    8: 2,  # String
    9: 4,  # Fieldref
    10: 4,  # Methodref
    11: 4,  # InterfaceMethodref
    12: 4,  # NameAndType
    15: 3,  # MethodHandle
    16: 2,  # MethodType
    17: 4,  # Dynamic
    18: 4,  # InvokeDynamic
    19: 2,  # Module
    20: 2,  # Package
}

# Long and Double take two constant pool slots.
_WIDE_TAGS = frozenset({5, 6})


class ClassFormatError(Exception):
    """Raised when bytes cannot be decoded as a class file."""


# ---------------------------------------------------------------------------
# Modified UTF-8
# ---------------------------------------------------------------------------


def decode_modified_utf8(raw: bytes) -> str:
    """Decode the JVM's Modified UTF-8 (JVMS 4.4.7).

    Differs from standard UTF-8 in two ways: NUL is encoded as ``C0 80``
    and supplementary characters are stored as surrogate pairs, each pair
    half taking three bytes.
    """
    units: list[int] = []
    i = 0
    n = len(raw)
    while i < n:
        b = raw[i]
        if b < 0x80:
            units.append(b)
            i += 1
        elif b & 0xE0 == 0xC0 and i + 1 < n:
            units.append(((b & 0x1F) << 6) | (raw[i + 1] & 0x3F))
            i += 2
        elif b & 0xF0 == 0xE0 and i + 2 < n:
            units.append(((b & 0x0F) << 12) | ((raw[i + 1] & 0x3F) << 6) | (raw[i + 2] & 0x3F))
            i += 3
        else:
            raise ClassFormatError(f"Malformed modified UTF-8 byte 0x{b:02x} at offset {i}")

    if any(0xD800 <= unit <= 0xDFFF for unit in units):
        # Join surrogate pairs back into supplementary characters.
        encoded = b"".join(unit.to_bytes(2, "big") for unit in units)
        return encoded.decode("utf-16-be", errors="surrogatepass")
    return "".join(map(chr, units))


# ---------------------------------------------------------------------------
# Byte cursor
# ---------------------------------------------------------------------------


class _Cursor:
    """Big-endian reader over a class file buffer."""

    def __init__(self, data: bytes) -> None:
        self.data = data
        self.pos = 0

    def u1(self) -> int:
        return self._unpack(">B", 1)

    def u2(self) -> int:
        return self._unpack(">H", 2)

    def u4(self) -> int:
        return self._unpack(">I", 4)

    def read(self, size: int) -> bytes:
        end = self.pos + size
        if end > len(self.data):
            raise ClassFormatError(f"Truncated class file: need {size} bytes at offset {self.pos}")
        chunk = self.data[self.pos : end]
        self.pos = end
        return chunk

    def skip(self, size: int) -> None:
        self.read(size)

    def _unpack(self, fmt: str, size: int) -> int:
        try:
            (value,) = struct.unpack_from(fmt, self.data, self.pos)
        except struct.error as exc:
            raise ClassFormatError(f"Truncated class file at offset {self.pos}") from exc
        self.pos += size
        return value


# ---------------------------------------------------------------------------
# Constant pool
# ---------------------------------------------------------------------------


class _ConstantPool:
    """Resolves the two entry kinds the reader needs: Utf8 and Class."""

    def __init__(self, utf8: dict[int, str], classes: dict[int, int], count: int) -> None:
        self._utf8 = utf8
        self._classes = classes
        self.count = count

    def utf8(self, index: int) -> str:
        try:
            return self._utf8[index]
        except KeyError:
            raise ClassFormatError(f"Constant pool index {index} is not a Utf8 entry") from None

    def class_name(self, index: int) -> str:
        try:
            name_index = self._classes[index]
        except KeyError:
            raise ClassFormatError(f"Constant pool index {index} is not a Class entry") from None
        return self.utf8(name_index)


def _read_constant_pool(cursor: _Cursor) -> _ConstantPool:
    count = cursor.u2()
    utf8: dict[int, str] = {}
    classes: dict[int, int] = {}

    index = 1
    while index < count:
        tag = cursor.u1()
        if tag == _TAG_UTF8:
            length = cursor.u2()
            utf8[index] = decode_modified_utf8(cursor.read(length))
        elif tag == _TAG_CLASS:
            classes[index] = cursor.u2()
        elif tag in _FIXED_SIZE_TAGS:
            cursor.skip(_FIXED_SIZE_TAGS[tag])
        else:
            raise ClassFormatError(f"Unknown constant pool tag {tag} at offset {cursor.pos - 1}")
        index += 2 if tag in _WIDE_TAGS else 1

    return _ConstantPool(utf8, classes, count)


# ---------------------------------------------------------------------------
# Members
# ---------------------------------------------------------------------------


def _skip_attributes(cursor: _Cursor) -> None:
    for _ in range(cursor.u2()):
        cursor.skip(2)
        cursor.skip(cursor.u4())


def _read_method(cursor: _Cursor, pool: _ConstantPool) -> MethodInfo:
    access_flags = cursor.u2()
    name = pool.utf8(cursor.u2())
    descriptor = pool.utf8(cursor.u2())

    code: bytes | None = None
    for _ in range(cursor.u2()):
        attr_name = pool.utf8(cursor.u2())
        attr_length = cursor.u4()
        payload = cursor.read(attr_length)
        if attr_name == "Code" and code is None:
            code = _extract_code(payload)

    return MethodInfo(name=name, descriptor=descriptor, access_flags=access_flags, code=code)


def _extract_code(payload: bytes) -> bytes:
    # max_stack(2) + max_locals(2) + code_length(4) + code[code_length] + ...
    attr = _Cursor(payload)
    attr.skip(4)
    return attr.read(attr.u4())


def parse_class_file(data: bytes) -> ClassInfo:
    """Decode *data* into a :class:`ClassInfo`.

    Raises
    ------
    ClassFormatError
        If the magic number is wrong, the data is truncated, or the
        constant pool contains an unknown tag or a dangling reference.
    """
    if data[:4] != CLASS_MAGIC:
        raise ClassFormatError("Not a class file (bad magic number)")

    cursor = _Cursor(data)
    cursor.skip(8)  # magic, minor_version, major_version
    pool = _read_constant_pool(cursor)

    access_flags = cursor.u2()
    name = pool.class_name(cursor.u2())
    super_index = cursor.u2()
    super_name = pool.class_name(super_index) if super_index else None

    cursor.skip(2 * cursor.u2())  # interfaces

    for _ in range(cursor.u2()):  # fields
        cursor.skip(6)
        _skip_attributes(cursor)

    methods = [_read_method(cursor, pool) for _ in range(cursor.u2())]

    return ClassInfo(
        name=name,
        access_flags=access_flags,
        super_name=super_name,
        methods=methods,
    )
