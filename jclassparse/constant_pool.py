"""Reading, resolving and validating the constant pool of a class file."""

from __future__ import annotations

import struct
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from enum import Enum, IntFlag
from typing import Union

from .binary import ByteReader
from .descriptors import is_array_descriptor, is_field_descriptor, is_method_descriptor
from .errors import ParseError
from .names import (
    is_binary_name,
    is_module_name,
    is_unqualified_method_name,
    is_unqualified_name,
)

_UNEXPECTED_TYPE = "Unexpected constant pool reference type"
_NOT_UTF8 = "Attempting to get utf-8 data from non-utf8 constant pool entry!"


class ReferenceKind(Enum):
    """The kind of a method handle, valued by its class file code."""

    GET_FIELD = 1
    GET_STATIC = 2
    PUT_FIELD = 3
    PUT_STATIC = 4
    INVOKE_VIRTUAL = 5
    INVOKE_STATIC = 6
    INVOKE_SPECIAL = 7
    NEW_INVOKE_SPECIAL = 8
    INVOKE_INTERFACE = 9


class EntryType(IntFlag):
    """The type of a constant pool entry, combinable into sets of allowed types."""

    ZERO = 0x0000_0001
    UTF8 = 0x0000_0002
    INTEGER = 0x0000_0004
    FLOAT = 0x0000_0008
    LONG = 0x0000_0010
    DOUBLE = 0x0000_0020
    CLASS_INFO = 0x0000_0040
    STRING = 0x0000_0080
    FIELD_REF = 0x0000_0100
    METHOD_REF = 0x0000_0200
    INTERFACE_METHOD_REF = 0x0000_0400
    NAME_AND_TYPE = 0x0000_0800
    METHOD_HANDLE = 0x0000_1000
    METHOD_TYPE = 0x0000_2000
    DYNAMIC = 0x0000_4000
    INVOKE_DYNAMIC = 0x0000_8000
    MODULE_INFO = 0x0001_0000
    PACKAGE_INFO = 0x0002_0000
    UNUSED = 0x0004_0000

    NEW_METHOD_REFS = METHOD_REF | INTERFACE_METHOD_REF
    CONSTANTS = INTEGER | FLOAT | LONG | DOUBLE | STRING
    BOOTSTRAP_ARGUMENT = CONSTANTS | CLASS_INFO | METHOD_HANDLE | METHOD_TYPE
    LOADABLE = CONSTANTS | CLASS_INFO | METHOD_HANDLE | METHOD_TYPE | DYNAMIC


_HANDLE_TARGETS = {
    ReferenceKind.GET_FIELD: EntryType.FIELD_REF,
    ReferenceKind.GET_STATIC: EntryType.FIELD_REF,
    ReferenceKind.PUT_FIELD: EntryType.FIELD_REF,
    ReferenceKind.PUT_STATIC: EntryType.FIELD_REF,
    ReferenceKind.INVOKE_VIRTUAL: EntryType.METHOD_REF,
    ReferenceKind.NEW_INVOKE_SPECIAL: EntryType.METHOD_REF,
    ReferenceKind.INVOKE_INTERFACE: EntryType.INTERFACE_METHOD_REF,
}

EntryValue = Union[int, float, str, bytes, None]


@dataclass(eq=False)
class ConstantPoolEntry:
    """One slot of the constant pool.

    ``value`` holds the payload of literal entries: an ``int`` or ``float`` for
    numbers, a ``str`` for decodable UTF-8 data, or ``bytes`` for UTF-8 data
    that does not decode to text. ``refs`` holds the entries this one refers
    to, as pool indices until resolved and as entries afterwards.
    """

    kind: EntryType
    value: EntryValue = None
    refs: list[int | ConstantPoolEntry] = field(default_factory=list, repr=False)
    reference_kind: ReferenceKind | None = None
    bootstrap_index: int | None = None

    def resolve(self, my_index: int, pool: Sequence[ConstantPoolEntry]) -> None:
        """Replace index references with the entries of ``pool`` they name."""
        for position, ref in enumerate(self.refs):
            if isinstance(ref, ConstantPoolEntry):
                continue
            if ref == my_index:
                raise ParseError(
                    f"Constant pool entry at index {my_index} could not be resolved "
                    "due to self-reference"
                )
            if ref >= len(pool):
                raise ParseError(
                    f"Constant pool entry at index {my_index} references "
                    f"out-of-bounds index {ref}"
                )
            self.refs[position] = pool[ref]

    def target(self, position: int) -> ConstantPoolEntry:
        """The resolved entry at ``position`` among this entry's references."""
        ref = self.refs[position]
        if not isinstance(ref, ConstantPoolEntry):
            raise RuntimeError("constant pool reference has not been resolved")
        return ref

    def ensure_type(self, allowed: EntryType) -> None:
        """Raise ``ParseError`` unless this entry's type is among ``allowed``."""
        if allowed & self.kind != self.kind:
            raise ParseError(_UNEXPECTED_TYPE)

    def text(self) -> str:
        """The string held by a UTF-8 entry."""
        if self.kind is EntryType.UTF8:
            if isinstance(self.value, str):
                return self.value
            raise ParseError(_NOT_UTF8)
        raise ParseError(_UNEXPECTED_TYPE)

    def _checked(self, position: int, allowed: EntryType) -> ConstantPoolEntry:
        referenced = self.target(position)
        referenced.ensure_type(allowed)
        return referenced

    def _check_method_descriptor(self) -> None:
        if self.kind is EntryType.NAME_AND_TYPE:
            self.target(1)._check_method_descriptor()
        elif not is_method_descriptor(self.text()):
            raise ParseError("Invalid method descriptor")

    def _check_field_descriptor(self) -> None:
        if not is_field_descriptor(self.target(1).text()):
            raise ParseError("Invalid field descriptor")

    def validate(self, major_version: int) -> None:
        """Check that references point at entries of the right types and forms."""
        kind = self.kind
        if kind is EntryType.CLASS_INFO:
            name = self._checked(0, EntryType.UTF8).text()
            if not (is_binary_name(name) or is_array_descriptor(name)):
                raise ParseError("Invalid classinfo name")
        elif kind is EntryType.STRING:
            self._checked(0, EntryType.UTF8)
        elif kind is EntryType.FIELD_REF:
            self._checked(0, EntryType.CLASS_INFO)
            self._checked(1, EntryType.NAME_AND_TYPE)._check_field_descriptor()
        elif kind in (EntryType.METHOD_REF, EntryType.INTERFACE_METHOD_REF):
            self._checked(0, EntryType.CLASS_INFO)
            self._checked(1, EntryType.NAME_AND_TYPE)._check_method_descriptor()
        elif kind is EntryType.NAME_AND_TYPE:
            name = self._checked(0, EntryType.UTF8).text()
            if not (is_unqualified_name(name) or is_unqualified_method_name(name, True, False)):
                raise ParseError("Invalid unqualified name")
            # The descriptor's form is checked by the entries that use this one.
            self._checked(1, EntryType.UTF8)
        elif kind is EntryType.METHOD_HANDLE:
            self._checked(1, self._handle_target_type(major_version))
        elif kind is EntryType.METHOD_TYPE:
            self._checked(0, EntryType.UTF8)._check_method_descriptor()
        elif kind is EntryType.DYNAMIC:
            self._checked(0, EntryType.NAME_AND_TYPE)._check_field_descriptor()
        elif kind is EntryType.INVOKE_DYNAMIC:
            self._checked(0, EntryType.NAME_AND_TYPE)._check_method_descriptor()
        elif kind is EntryType.MODULE_INFO:
            if not is_module_name(self._checked(0, EntryType.UTF8).text()):
                raise ParseError("Invalid module name")
        elif kind is EntryType.PACKAGE_INFO:
            if not is_binary_name(self._checked(0, EntryType.UTF8).text()):
                raise ParseError("Invalid binary name")

    def _handle_target_type(self, major_version: int) -> EntryType:
        if self.reference_kind in (ReferenceKind.INVOKE_STATIC, ReferenceKind.INVOKE_SPECIAL):
            return EntryType.METHOD_REF if major_version < 52 else EntryType.NEW_METHOD_REFS
        return _HANDLE_TARGETS[self.reference_kind]


def _utf8_width(first: int) -> int:
    if 0xC2 <= first <= 0xDF:
        return 2
    if 0xE0 <= first <= 0xEF:
        return 3
    if 0xF0 <= first <= 0xF4:
        return 4
    return 0


def decode_modified_utf8(data: bytes) -> str:
    """Decode the modified UTF-8 used by class files.

    Plain UTF-8 is accepted as is. Otherwise ``C0 80`` stands for NUL and
    supplementary characters appear as encoded surrogate pairs. Raises
    ``ParseError`` if ``data`` is not valid in either form.
    """
    try:
        return bytes(data).decode("utf-8")
    except UnicodeDecodeError:
        pass

    invalid = ParseError("Invalid modified UTF-8 data")
    stream = iter(data)

    def following() -> int:
        byte = next(stream, None)
        if byte is None:
            raise invalid
        return byte

    def continuation() -> int:
        byte = following()
        if not 0x80 <= byte <= 0xBF:
            raise invalid
        return byte

    chars: list[str] = []
    for first in stream:
        if first < 0x80:
            chars.append(chr(first))
        elif first == 0xC0:
            if following() != 0x80:
                raise invalid
            chars.append("\x00")
        else:
            width = _utf8_width(first)
            if width == 0:
                raise invalid
            second = continuation()
            if width == 2:
                chars.append(bytes((first, second)).decode("utf-8"))
                continue
            if width != 3:
                raise invalid
            third = continuation()
            if (
                (first == 0xE0 and 0xA0 <= second <= 0xBF)
                or (0xE1 <= first <= 0xEC)
                or (first == 0xED and second <= 0x9F)
                or (0xEE <= first <= 0xEF)
            ):
                chars.append(bytes((first, second, third)).decode("utf-8"))
            elif first == 0xED and 0xA0 <= second <= 0xAF:
                if following() != 0xED:
                    raise invalid
                fifth = continuation()
                if not 0xB0 <= fifth <= 0xBF:
                    raise invalid
                sixth = continuation()
                high = ((second & 0x0F) << 6) | (third & 0x3F)
                low = ((fifth & 0x0F) << 6) | (sixth & 0x3F)
                chars.append(chr(0x10000 + (high << 10) + low))
            else:
                raise invalid
    return "".join(chars)


def _signed(value: int, bits: int) -> int:
    return value - (1 << bits) if value >= 1 << (bits - 1) else value


def _read_utf8(reader: ByteReader) -> ConstantPoolEntry:
    length = reader.read_u2()
    if len(reader.data) < reader.position + length:
        raise ParseError(
            f"Unexpected end of stream reading CONSTANT_Utf8 at index {reader.position}"
        )
    raw = reader.read_bytes(length)
    try:
        value: str | bytes = decode_modified_utf8(raw)
    except ParseError:
        # Unpaired surrogates in string literals cannot be text; keep the bytes.
        value = raw
    return ConstantPoolEntry(EntryType.UTF8, value)


def _read_method_handle(reader: ByteReader) -> ConstantPoolEntry:
    code = reader.read_u1()
    try:
        reference_kind = ReferenceKind(code)
    except ValueError:
        raise ParseError(
            f"Unexpected reference kind {code} when reading CONSTANT_methodhandle "
            f"at index {reader.position - 1}"
        ) from None
    return ConstantPoolEntry(
        EntryType.METHOD_HANDLE, refs=[0, reader.read_u2()], reference_kind=reference_kind
    )


def _read_refs(reader: ByteReader, kind: EntryType, count: int) -> ConstantPoolEntry:
    return ConstantPoolEntry(kind, refs=[reader.read_u2() for _ in range(count)])


def _read_bootstrap(reader: ByteReader, kind: EntryType) -> ConstantPoolEntry:
    bootstrap_index = reader.read_u2()
    return ConstantPoolEntry(kind, refs=[reader.read_u2()], bootstrap_index=bootstrap_index)


def _read_entry(reader: ByteReader, tag: int, major_version: int) -> ConstantPoolEntry:
    if tag == 1:
        return _read_utf8(reader)
    if tag == 3:
        return ConstantPoolEntry(EntryType.INTEGER, _signed(reader.read_u4(), 32))
    if tag == 4:
        return ConstantPoolEntry(
            EntryType.FLOAT, struct.unpack(">f", reader.read_u4().to_bytes(4, "big"))[0]
        )
    if tag == 5:
        return ConstantPoolEntry(EntryType.LONG, _signed(reader.read_u8(), 64))
    if tag == 6:
        return ConstantPoolEntry(
            EntryType.DOUBLE, struct.unpack(">d", reader.read_u8().to_bytes(8, "big"))[0]
        )
    if tag == 7:
        return _read_refs(reader, EntryType.CLASS_INFO, 1)
    if tag == 8:
        return _read_refs(reader, EntryType.STRING, 1)
    if tag == 9:
        return _read_refs(reader, EntryType.FIELD_REF, 2)
    if tag == 10:
        return _read_refs(reader, EntryType.METHOD_REF, 2)
    if tag == 11:
        return _read_refs(reader, EntryType.INTERFACE_METHOD_REF, 2)
    if tag == 12:
        return _read_refs(reader, EntryType.NAME_AND_TYPE, 2)
    if tag == 15 and major_version >= 51:
        return _read_method_handle(reader)
    if tag == 16 and major_version >= 51:
        return _read_refs(reader, EntryType.METHOD_TYPE, 1)
    if tag == 17 and major_version >= 55:
        return _read_bootstrap(reader, EntryType.DYNAMIC)
    if tag == 18 and major_version >= 51:
        return _read_bootstrap(reader, EntryType.INVOKE_DYNAMIC)
    if tag == 19 and major_version >= 53:
        return _read_refs(reader, EntryType.MODULE_INFO, 1)
    if tag == 20 and major_version >= 53:
        return _read_refs(reader, EntryType.PACKAGE_INFO, 1)
    raise ParseError(
        f"Unexpected constant pool entry type {tag} at index {reader.position - 1} "
        f"for classfile major version {major_version}"
    )


def _read_entries(reader: ByteReader, major_version: int) -> Iterator[ConstantPoolEntry]:
    count = reader.read_u2()
    yield ConstantPoolEntry(EntryType.ZERO)
    cp_index = 1
    while cp_index < count:
        tag = reader.read_u1()
        yield _read_entry(reader, tag, major_version)
        cp_index += 1
        if tag in (5, 6):
            # Longs and doubles occupy two slots.
            cp_index += 1
            yield ConstantPoolEntry(EntryType.UNUSED)


def read_constant_pool(reader: ByteReader, major_version: int) -> list[ConstantPoolEntry]:
    """Read, resolve and validate a constant pool; slot 0 is a placeholder."""
    pool = list(_read_entries(reader, major_version))
    for index, entry in enumerate(pool):
        entry.resolve(index, pool)
    for index, entry in enumerate(pool):
        try:
            entry.validate(major_version)
        except ParseError as error:
            raise error.with_context(f"constant pool entry {index}") from None
    return pool