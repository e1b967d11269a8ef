"""Typed views of constant pool entries referenced from class file data."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Union

from .binary import ByteReader
from .constant_pool import ConstantPoolEntry, EntryType, ReferenceKind
from .descriptors import FieldDescriptor, parse_array_descriptor
from .errors import ParseError

_UNEXPECTED_TYPE = "Unexpected constant pool reference type"


@dataclass(frozen=True)
class NameAndType:
    """A member name with its descriptor string."""

    name: str
    descriptor: str


class LiteralKind(Enum):
    """The kind of value a literal constant holds."""

    INTEGER = "integer"
    FLOAT = "float"
    LONG = "long"
    DOUBLE = "double"
    STRING = "string"
    STRING_BYTES = "string_bytes"


@dataclass(frozen=True)
class LiteralConstant:
    """A numeric or string constant.

    ``STRING_BYTES`` constants hold the raw bytes of string data that does
    not decode to text.
    """

    kind: LiteralKind
    value: Union[int, float, str, bytes]


@dataclass(frozen=True)
class MemberRef:
    """A reference to a field or method of a class."""

    class_name: str
    name_and_type: NameAndType


class MemberKind(Enum):
    """The kind of member a method handle refers to."""

    FIELD = "field"
    METHOD = "method"
    INTERFACE_METHOD = "interface_method"


@dataclass(frozen=True)
class MethodHandle:
    """A method handle constant."""

    kind: ReferenceKind
    class_name: str
    member_kind: MemberKind
    member_ref: NameAndType


@dataclass(frozen=True)
class Dynamic:
    """A dynamically computed constant."""

    attr_index: int
    name_and_type: NameAndType


@dataclass(frozen=True)
class InvokeDynamic:
    """A dynamically computed call site."""

    attr_index: int
    name_and_type: NameAndType


class ItemKind(Enum):
    """The kind of a constant pool item."""

    LITERAL_CONSTANT = "literal_constant"
    CLASS_INFO = "class_info"
    FIELD_REF = "field_ref"
    METHOD_REF = "method_ref"
    INTERFACE_METHOD_REF = "interface_method_ref"
    NAME_AND_TYPE = "name_and_type"
    METHOD_HANDLE = "method_handle"
    METHOD_TYPE = "method_type"
    DYNAMIC = "dynamic"
    INVOKE_DYNAMIC = "invoke_dynamic"
    MODULE_INFO = "module_info"
    PACKAGE_INFO = "package_info"


ItemValue = Union[
    LiteralConstant, str, MemberRef, NameAndType, MethodHandle, Dynamic, InvokeDynamic
]


@dataclass(frozen=True)
class ConstantPoolItem:
    """A constant pool entry in usable form, tagged with its kind."""

    kind: ItemKind
    value: ItemValue


_NUMERIC_KINDS = {
    EntryType.INTEGER: LiteralKind.INTEGER,
    EntryType.FLOAT: LiteralKind.FLOAT,
    EntryType.LONG: LiteralKind.LONG,
    EntryType.DOUBLE: LiteralKind.DOUBLE,
}

_MEMBER_KINDS = {
    EntryType.FIELD_REF: MemberKind.FIELD,
    EntryType.METHOD_REF: MemberKind.METHOD,
    EntryType.INTERFACE_METHOD_REF: MemberKind.INTERFACE_METHOD,
}

_MEMBER_ITEM_KINDS = {
    EntryType.FIELD_REF: ItemKind.FIELD_REF,
    EntryType.METHOD_REF: ItemKind.METHOD_REF,
    EntryType.INTERFACE_METHOD_REF: ItemKind.INTERFACE_METHOD_REF,
}


def _entry_at(cp_index: int, pool: Sequence[ConstantPoolEntry]) -> ConstantPoolEntry:
    if cp_index >= len(pool):
        raise ParseError(f"Out-of-bounds index {cp_index} in constant pool reference")
    return pool[cp_index]


def _read_ref(reader: ByteReader, pool: Sequence[ConstantPoolEntry]) -> ConstantPoolEntry:
    return _entry_at(reader.read_u2(), pool)


def _classinfo(entry: ConstantPoolEntry) -> str:
    return entry.target(0).text()


def _name_and_type(entry: ConstantPoolEntry) -> NameAndType:
    return NameAndType(entry.target(0).text(), entry.target(1).text())


def _string_literal(utf8_entry: ConstantPoolEntry) -> LiteralConstant:
    value = utf8_entry.value
    if isinstance(value, str):
        return LiteralConstant(LiteralKind.STRING, value)
    if isinstance(value, bytes):
        return LiteralConstant(LiteralKind.STRING_BYTES, value)
    raise ParseError(_UNEXPECTED_TYPE)


def _literal(entry: ConstantPoolEntry) -> LiteralConstant | None:
    literal_kind = _NUMERIC_KINDS.get(entry.kind)
    if literal_kind is not None:
        return LiteralConstant(literal_kind, entry.value)
    if entry.kind is EntryType.STRING:
        return _string_literal(entry.target(0))
    return None


def _member_ref(entry: ConstantPoolEntry) -> MemberRef:
    return MemberRef(_classinfo(entry.target(0)), _name_and_type(entry.target(1)))


def _make_method_handle(entry: ConstantPoolEntry) -> MethodHandle:
    member = entry.target(1)
    member_kind = _MEMBER_KINDS.get(member.kind)
    if member_kind is None or entry.reference_kind is None:
        raise ParseError(_UNEXPECTED_TYPE)
    return MethodHandle(
        entry.reference_kind,
        _classinfo(member.target(0)),
        member_kind,
        _name_and_type(member.target(1)),
    )


def _bootstrap_item(entry: ConstantPoolEntry) -> ConstantPoolItem | None:
    literal = _literal(entry)
    if literal is not None:
        return ConstantPoolItem(ItemKind.LITERAL_CONSTANT, literal)
    if entry.kind is EntryType.CLASS_INFO:
        return ConstantPoolItem(ItemKind.CLASS_INFO, _classinfo(entry))
    if entry.kind is EntryType.METHOD_HANDLE:
        return ConstantPoolItem(ItemKind.METHOD_HANDLE, _make_method_handle(entry))
    if entry.kind is EntryType.METHOD_TYPE:
        return ConstantPoolItem(ItemKind.METHOD_TYPE, entry.target(0).text())
    return None


def _dynamic(entry: ConstantPoolEntry) -> Dynamic:
    return Dynamic(entry.bootstrap_index or 0, _name_and_type(entry.target(0)))


def read_cp_utf8(reader: ByteReader, pool: Sequence[ConstantPoolEntry]) -> str:
    """Read a reference to a UTF-8 entry and return its text."""
    entry = _read_ref(reader, pool)
    if entry.kind is EntryType.UTF8 and isinstance(entry.value, str):
        return entry.value
    raise ParseError(_UNEXPECTED_TYPE)


def read_cp_utf8_opt(reader: ByteReader, pool: Sequence[ConstantPoolEntry]) -> str | None:
    """Like ``read_cp_utf8``, but a reference to slot 0 gives ``None``."""
    entry = _read_ref(reader, pool)
    if entry.kind is EntryType.ZERO:
        return None
    if entry.kind is EntryType.UTF8 and isinstance(entry.value, str):
        return entry.value
    raise ParseError(_UNEXPECTED_TYPE)


def read_cp_classinfo(reader: ByteReader, pool: Sequence[ConstantPoolEntry]) -> str:
    """Read a reference to a class entry and return the class name."""
    entry = _read_ref(reader, pool)
    if entry.kind is EntryType.CLASS_INFO:
        return _classinfo(entry)
    raise ParseError(_UNEXPECTED_TYPE)


def read_cp_classinfo_opt(reader: ByteReader, pool: Sequence[ConstantPoolEntry]) -> str | None:
    """Like ``read_cp_classinfo``, but a reference to slot 0 gives ``None``."""
    entry = _read_ref(reader, pool)
    if entry.kind is EntryType.ZERO:
        return None
    if entry.kind is EntryType.CLASS_INFO:
        return _classinfo(entry)
    raise ParseError(_UNEXPECTED_TYPE)


def read_cp_moduleinfo(reader: ByteReader, pool: Sequence[ConstantPoolEntry]) -> str:
    """Read a reference to a module entry and return the module name."""
    entry = _read_ref(reader, pool)
    if entry.kind is EntryType.MODULE_INFO:
        return entry.target(0).text()
    raise ParseError(_UNEXPECTED_TYPE)


def read_cp_packageinfo(reader: ByteReader, pool: Sequence[ConstantPoolEntry]) -> str:
    """Read a reference to a package entry and return the package name."""
    entry = _read_ref(reader, pool)
    if entry.kind is EntryType.PACKAGE_INFO:
        return entry.target(0).text()
    raise ParseError(_UNEXPECTED_TYPE)


def read_cp_nameandtype_opt(
    reader: ByteReader, pool: Sequence[ConstantPoolEntry]
) -> NameAndType | None:
    """Read a reference to a name-and-type entry; slot 0 gives ``None``."""
    entry = _read_ref(reader, pool)
    if entry.kind is EntryType.ZERO:
        return None
    if entry.kind is EntryType.NAME_AND_TYPE:
        return _name_and_type(entry)
    raise ParseError(_UNEXPECTED_TYPE)


def read_cp_literalconstant(
    reader: ByteReader, pool: Sequence[ConstantPoolEntry]
) -> LiteralConstant:
    """Read a reference to a numeric or string constant."""
    literal = _literal(_read_ref(reader, pool))
    if literal is None:
        raise ParseError(_UNEXPECTED_TYPE)
    return literal


def _read_number(reader: ByteReader, pool: Sequence[ConstantPoolEntry], kind: EntryType):
    entry = _read_ref(reader, pool)
    if entry.kind is kind:
        return entry.value
    raise ParseError(_UNEXPECTED_TYPE)


def read_cp_integer(reader: ByteReader, pool: Sequence[ConstantPoolEntry]) -> int:
    """Read a reference to an integer constant."""
    return _read_number(reader, pool, EntryType.INTEGER)


def read_cp_float(reader: ByteReader, pool: Sequence[ConstantPoolEntry]) -> float:
    """Read a reference to a float constant."""
    return _read_number(reader, pool, EntryType.FLOAT)


def read_cp_long(reader: ByteReader, pool: Sequence[ConstantPoolEntry]) -> int:
    """Read a reference to a long constant."""
    return _read_number(reader, pool, EntryType.LONG)


def read_cp_double(reader: ByteReader, pool: Sequence[ConstantPoolEntry]) -> float:
    """Read a reference to a double constant."""
    return _read_number(reader, pool, EntryType.DOUBLE)


def read_cp_memberref(
    reader: ByteReader, pool: Sequence[ConstantPoolEntry], allowed: EntryType
) -> MemberRef:
    """Read a reference to a field or method entry whose type is in ``allowed``."""
    entry = _read_ref(reader, pool)
    entry.ensure_type(allowed)
    if entry.kind in _MEMBER_KINDS:
        return _member_ref(entry)
    raise ParseError(_UNEXPECTED_TYPE)


def read_cp_invokedynamic(
    reader: ByteReader, pool: Sequence[ConstantPoolEntry]
) -> InvokeDynamic:
    """Read a reference to an invokedynamic entry."""
    entry = _read_ref(reader, pool)
    if entry.kind is EntryType.INVOKE_DYNAMIC:
        return InvokeDynamic(entry.bootstrap_index or 0, _name_and_type(entry.target(0)))
    raise ParseError(_UNEXPECTED_TYPE)


def read_cp_methodhandle(reader: ByteReader, pool: Sequence[ConstantPoolEntry]) -> MethodHandle:
    """Read a reference to a method handle entry."""
    entry = _read_ref(reader, pool)
    if entry.kind is EntryType.METHOD_HANDLE:
        return _make_method_handle(entry)
    raise ParseError(_UNEXPECTED_TYPE)


def read_cp_bootstrap_argument(
    reader: ByteReader, pool: Sequence[ConstantPoolEntry]
) -> ConstantPoolItem:
    """Read a reference to an entry usable as a bootstrap method argument."""
    item = _bootstrap_item(_read_ref(reader, pool))
    if item is None:
        raise ParseError(_UNEXPECTED_TYPE)
    return item


def read_cp_object_array_type(
    reader: ByteReader, pool: Sequence[ConstantPoolEntry]
) -> FieldDescriptor | str:
    """Read a class reference naming an array type or a class.

    Returns the parsed array descriptor, or the binary name for classes.
    """
    entry = _read_ref(reader, pool)
    if entry.kind is not EntryType.CLASS_INFO:
        raise ParseError(_UNEXPECTED_TYPE)
    name = _classinfo(entry)
    descriptor = parse_array_descriptor(name)
    return name if descriptor is None else descriptor


def get_cp_loadable(cp_index: int, pool: Sequence[ConstantPoolEntry]) -> ConstantPoolItem:
    """Return the loadable constant at ``cp_index``."""
    entry = _entry_at(cp_index, pool)
    item = _bootstrap_item(entry)
    if item is not None:
        return item
    if entry.kind is EntryType.DYNAMIC:
        return ConstantPoolItem(ItemKind.DYNAMIC, _dynamic(entry))
    raise ParseError("Unexpected non-loadable constant pool reference found")


def _pool_item(entry: ConstantPoolEntry) -> ConstantPoolItem | None:
    kind = entry.kind
    if kind in (EntryType.ZERO, EntryType.UTF8, EntryType.UNUSED):
        return None
    item = _bootstrap_item(entry)
    if item is not None:
        return item
    if kind in _MEMBER_ITEM_KINDS:
        return ConstantPoolItem(_MEMBER_ITEM_KINDS[kind], _member_ref(entry))
    if kind is EntryType.NAME_AND_TYPE:
        return ConstantPoolItem(ItemKind.NAME_AND_TYPE, _name_and_type(entry))
    if kind is EntryType.DYNAMIC:
        return ConstantPoolItem(ItemKind.DYNAMIC, _dynamic(entry))
    if kind is EntryType.INVOKE_DYNAMIC:
        return ConstantPoolItem(
            ItemKind.INVOKE_DYNAMIC,
            InvokeDynamic(entry.bootstrap_index or 0, _name_and_type(entry.target(0))),
        )
    if kind is EntryType.MODULE_INFO:
        return ConstantPoolItem(ItemKind.MODULE_INFO, entry.target(0).text())
    if kind is EntryType.PACKAGE_INFO:
        return ConstantPoolItem(ItemKind.PACKAGE_INFO, entry.target(0).text())
    raise ParseError(_UNEXPECTED_TYPE)


def iter_constant_pool(pool: Sequence[ConstantPoolEntry]) -> Iterator[ConstantPoolItem]:
    """Yield the pool's items in order, skipping UTF-8 data and unused slots."""
    for entry in pool[1:]:
        item = _pool_item(entry)
        if item is not None:
            yield item