"""Identity keys used to match items across two API models."""

from __future__ import annotations

from apidiff_core.models.bytecode import ClassInfo, MethodInfo, PackageInfo

METHOD_KEY_SEPARATOR = " :: "


def package_key(package: PackageInfo) -> str:
    return package.name


def type_key(cls: ClassInfo) -> str:
    """Types are matched by simple name within an already-matched package."""
    return cls.simple_name


def method_key(method: MethodInfo) -> str:
    """Name plus descriptor, so overloads stay distinct."""
    return f"{method.name}{METHOD_KEY_SEPARATOR}{method.descriptor}"
