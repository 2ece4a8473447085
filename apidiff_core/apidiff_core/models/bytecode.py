"""Decoded view of a compiled Java API surface.

These models are produced by :mod:`apidiff_core.loader` and consumed
read-only by the diff engine.  Names follow the JVM's internal form
(``com/example/Foo$Bar``) on :class:`ClassInfo`; dotted forms are derived
through properties so that the raw class-file value is never lost.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# Class access flag marking an enum type (JVMS 4.1).
ACC_ENUM = 0x4000


class MethodInfo(BaseModel):
    """A single method declared by a class."""

    name: str = Field(..., description="Method name, e.g. 'toString' or '<init>'.")
    descriptor: str = Field(
        ...,
        description="JVM method descriptor, e.g. '(ILjava/lang/String;)V'.",
    )
    access_flags: int = Field(default=0, description="Raw method access_flags.")
    code: bytes | None = Field(
        default=None,
        description="Instruction bytes of the Code attribute; None when absent.",
    )

    @property
    def has_body(self) -> bool:
        return self.code is not None


class ClassInfo(BaseModel):
    """A class, interface, enum or annotation type read from a ``.class`` file."""

    name: str = Field(..., min_length=1, description="Internal binary name, e.g. 'com/a/Foo'.")
    access_flags: int = Field(default=0, description="Raw class access_flags.")
    super_name: str | None = Field(
        default=None,
        description="Internal name of the superclass; None for java/lang/Object.",
    )
    methods: list[MethodInfo] = Field(default_factory=list)

    @property
    def simple_name(self) -> str:
        """Name without its package, nested-class ``$`` segments preserved."""
        return self.name.rsplit("/", 1)[-1]

    @property
    def package_name(self) -> str:
        """Dotted package name, or ``""`` for the default package."""
        if "/" not in self.name:
            return ""
        return self.name.rsplit("/", 1)[0].replace("/", ".")

    @property
    def qualified_name(self) -> str:
        return self.name.replace("/", ".")

    @property
    def is_enum(self) -> bool:
        return bool(self.access_flags & ACC_ENUM)


class PackageInfo(BaseModel):
    """All types that share one package in an archive."""

    name: str = Field(..., description="Dotted package name; '' for the default package.")
    types: list[ClassInfo] = Field(default_factory=list)


class ApiModel(BaseModel):
    """The full decoded surface of one archive."""

    source: str = Field(default="", description="Path the model was loaded from.")
    packages: list[PackageInfo] = Field(default_factory=list)

    @property
    def type_count(self) -> int:
        return sum(len(package.types) for package in self.packages)
