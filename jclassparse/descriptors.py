"""Parsing of field, method and return descriptors and of class names."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .errors import ParseError

_MAX_DIMENSIONS = 255
_DISALLOWED_IN_SEGMENT = frozenset(".[<>")


def _parse_unqualified_segment(data: str, start: int) -> tuple[int, str | None]:
    """Scan the unqualified segment beginning at ``start``.

    Returns the index where the segment ends and the character that ends it
    ('/' or ';'), or ``None`` if the segment runs to the end of ``data``.
    """
    for offset, c in enumerate(data[start:]):
        if c in "/;":
            if offset == 0:
                raise ParseError(f"Unexpected '{c}' at start of unqualified segment")
            return start + offset, c
        if c in _DISALLOWED_IN_SEGMENT:
            raise ParseError("Disallowed character in unqualified segment")
    return len(data), None


class ClassName(str):
    """A binary class or interface name such as ``java/lang/Object``."""

    __slots__ = ()

    @classmethod
    def parse(cls, value: str) -> ClassName:
        """Validate ``value`` as a sequence of '/'-separated unqualified segments."""
        index = 0
        while True:
            end, terminator = _parse_unqualified_segment(value, index)
            if terminator is None:
                break
            if terminator == ";":
                raise ParseError("Disallowed ';' in class name")
            index = end + 1
        return cls(value)

    def byte_len(self) -> int:
        """Length of the name in UTF-8 bytes."""
        return len(self.encode("utf-8"))

    def __repr__(self) -> str:
        return f"ClassName({str.__repr__(self)})"


def _parse_class_descriptor(data: str, index: int) -> ClassName:
    """Read the class name starting at ``index`` and terminated by ';'."""
    next_index = index
    while True:
        end, terminator = _parse_unqualified_segment(data, next_index)
        if terminator == ";":
            return ClassName(data[index:end])
        if terminator is None:
            raise ParseError("Unterminated unqualified segment")
        next_index = end + 1


class BaseType(Enum):
    """The primitive field types, valued by their descriptor character."""

    BYTE = "B"
    CHAR = "C"
    DOUBLE = "D"
    FLOAT = "F"
    INTEGER = "I"
    LONG = "J"
    SHORT = "S"
    BOOLEAN = "Z"

    def byte_len(self) -> int:
        """Length of the descriptor form in bytes."""
        return 1

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ObjectType:
    """A reference field type naming a class."""

    class_name: ClassName

    def byte_len(self) -> int:
        """Length of the ``L<name>;`` form in UTF-8 bytes."""
        return 2 + len(self.class_name.encode("utf-8"))

    def __str__(self) -> str:
        return f"L{self.class_name};"


FieldType = Union[BaseType, ObjectType]


@dataclass(frozen=True)
class FieldDescriptor:
    """A field type with its array dimensions (0 for non-arrays)."""

    dimensions: int
    field_type: FieldType

    def byte_len(self) -> int:
        """Length of the descriptor form in UTF-8 bytes."""
        return self.dimensions + self.field_type.byte_len()

    def __str__(self) -> str:
        return "[" * self.dimensions + str(self.field_type)


ReturnDescriptor = Optional[FieldDescriptor]
"""A method's return type; ``None`` stands for void."""


def _return_str(return_type: ReturnDescriptor) -> str:
    return "V" if return_type is None else str(return_type)


def return_byte_len(return_type: ReturnDescriptor) -> int:
    """Length in UTF-8 bytes of a return descriptor (``None`` is void)."""
    return 1 if return_type is None else return_type.byte_len()


@dataclass(frozen=True)
class MethodDescriptor:
    """A method's parameter types and return type."""

    parameters: tuple[FieldDescriptor, ...]
    return_type: ReturnDescriptor

    def byte_len(self) -> int:
        """Length of the descriptor form in UTF-8 bytes."""
        return (
            2
            + sum(parameter.byte_len() for parameter in self.parameters)
            + return_byte_len(self.return_type)
        )

    def __str__(self) -> str:
        params = "".join(str(parameter) for parameter in self.parameters)
        return f"({params}){_return_str(self.return_type)}"


_BASE_TYPES = {member.value: member for member in BaseType}


def parse_field_descriptor(data: str, index: int = 0) -> FieldDescriptor:
    """Parse the field descriptor at ``index``, ignoring whatever follows it."""
    dimensions = 0
    for c in data[index:]:
        if c == "[":
            dimensions += 1
            if dimensions > _MAX_DIMENSIONS:
                raise ParseError("Dimensions in field descriptor exceeded allowed limit")
            continue
        field_type: FieldType
        if c == "L":
            field_type = ObjectType(_parse_class_descriptor(data, index + dimensions + 1))
        elif c in _BASE_TYPES:
            field_type = _BASE_TYPES[c]
        else:
            raise ParseError("Unexpected field type")
        return FieldDescriptor(dimensions, field_type)
    raise ParseError("Empty string is not a field descriptor")


def parse_return_descriptor(data: str, index: int = 0) -> ReturnDescriptor:
    """Parse a return descriptor at ``index``; ``None`` means void."""
    if data[index:] == "V":
        return None
    return parse_field_descriptor(data, index)


def parse_method_descriptor(data: str, index: int = 0) -> MethodDescriptor:
    """Parse the method descriptor starting at ``index``."""
    if len(data) <= index or data[index] != "(":
        raise ParseError("Method descriptor must start with '('")
    index += 1
    parameters = []
    while not (index < len(data) and data[index] == ")"):
        parameter = parse_field_descriptor(data, index)
        index += len(str(parameter))
        parameters.append(parameter)
    index += 1
    return_type = parse_return_descriptor(data, index)
    return MethodDescriptor(tuple(parameters), return_type)


def parse_array_descriptor(data: str) -> FieldDescriptor | None:
    """Parse ``data`` as an array descriptor, or return ``None`` if it is not one.

    Raises ``ParseError`` if ``data`` starts like an array descriptor but is
    not a complete, valid one.
    """
    if not data or data[0] != "[":
        return None
    desc = parse_field_descriptor(data, 0)
    if len(data) != len(str(desc)):
        raise ParseError("Not a field descriptor")
    return desc


def is_field_descriptor(name: str) -> bool:
    """True if all of ``name`` is one field descriptor."""
    try:
        desc = parse_field_descriptor(name, 0)
    except ParseError:
        return False
    return len(name) == len(str(desc))


def is_array_descriptor(name: str) -> bool:
    """True if all of ``name`` is one array field descriptor."""
    return is_field_descriptor(name) and name[0] == "["


def is_method_descriptor(name: str) -> bool:
    """True if all of ``name`` is one method descriptor."""
    try:
        desc = parse_method_descriptor(name, 0)
    except ParseError:
        return False
    return len(name) == len(str(desc))


def is_return_descriptor(name: str) -> bool:
    """True if all of ``name`` is one return descriptor."""
    try:
        desc = parse_return_descriptor(name, 0)
    except ParseError:
        return False
    return len(name) == len(_return_str(desc))