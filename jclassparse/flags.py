"""Access flag sets for classes, fields and methods."""

from __future__ import annotations

from enum import IntFlag
from functools import reduce
from operator import or_
from typing import TypeVar


class AccessFlags(IntFlag):
    """Every access flag bit, with the names each context gives it."""

    PUBLIC = 0x0001
    PRIVATE = 0x0002
    PROTECTED = 0x0004
    STATIC = 0x0008
    FINAL = 0x0010
    SUPER = 0x0020
    SYNCHRONIZED = 0x0020
    OPEN = 0x0020
    TRANSITIVE = 0x0020
    VOLATILE = 0x0040
    BRIDGE = 0x0040
    STATIC_PHASE = 0x0040
    TRANSIENT = 0x0080
    VARARGS = 0x0080
    NATIVE = 0x0100
    INTERFACE = 0x0200
    ABSTRACT = 0x0400
    STRICT = 0x0800
    SYNTHETIC = 0x1000
    ANNOTATION = 0x2000
    ENUM = 0x4000
    MANDATED = 0x8000
    MODULE = 0x8000


class FieldAccessFlags(IntFlag):
    """Access flags that apply to fields."""

    PUBLIC = AccessFlags.PUBLIC.value
    PRIVATE = AccessFlags.PRIVATE.value
    PROTECTED = AccessFlags.PROTECTED.value
    STATIC = AccessFlags.STATIC.value
    FINAL = AccessFlags.FINAL.value
    VOLATILE = AccessFlags.VOLATILE.value
    TRANSIENT = AccessFlags.TRANSIENT.value
    SYNTHETIC = AccessFlags.SYNTHETIC.value
    ENUM = AccessFlags.ENUM.value


class MethodAccessFlags(IntFlag):
    """Access flags that apply to methods."""

    PUBLIC = AccessFlags.PUBLIC.value
    PRIVATE = AccessFlags.PRIVATE.value
    PROTECTED = AccessFlags.PROTECTED.value
    STATIC = AccessFlags.STATIC.value
    FINAL = AccessFlags.FINAL.value
    SYNCHRONIZED = AccessFlags.SYNCHRONIZED.value
    BRIDGE = AccessFlags.BRIDGE.value
    VARARGS = AccessFlags.VARARGS.value
    NATIVE = AccessFlags.NATIVE.value
    ABSTRACT = AccessFlags.ABSTRACT.value
    STRICT = AccessFlags.STRICT.value
    SYNTHETIC = AccessFlags.SYNTHETIC.value


class ClassAccessFlags(IntFlag):
    """Access flags that apply to classes."""

    PUBLIC = AccessFlags.PUBLIC.value
    FINAL = AccessFlags.FINAL.value
    SUPER = AccessFlags.SUPER.value
    INTERFACE = AccessFlags.INTERFACE.value
    ABSTRACT = AccessFlags.ABSTRACT.value
    SYNTHETIC = AccessFlags.SYNTHETIC.value
    ANNOTATION = AccessFlags.ANNOTATION.value
    ENUM = AccessFlags.ENUM.value
    MODULE = AccessFlags.MODULE.value


F = TypeVar("F", bound=IntFlag)


def parse_flags(flag_type: type[F], value: int) -> F:
    """Build ``flag_type`` from ``value``, dropping bits it does not define."""
    mask = reduce(or_, (member.value for member in flag_type.__members__.values()), 0)
    return flag_type(value & mask)