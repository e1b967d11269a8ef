"""Big-endian reading of class file data."""

from __future__ import annotations

from .errors import ParseError


class ByteReader:
    """Reads unsigned big-endian integers and byte runs from a buffer."""

    __slots__ = ("data", "position")

    def __init__(self, data: bytes, position: int = 0) -> None:
        self.data = bytes(data)
        self.position = position

    def _take(self, size: int, label: str) -> bytes:
        start = self.position
        if len(self.data) < start + size:
            raise ParseError(f"Unexpected end of stream reading {label} at index {start}")
        self.position = start + size
        return self.data[start : start + size]

    def read_u1(self) -> int:
        """Read one unsigned byte."""
        return self._take(1, "u1")[0]

    def read_u2(self) -> int:
        """Read a two-byte unsigned integer."""
        return int.from_bytes(self._take(2, "u2"), "big")

    def read_u4(self) -> int:
        """Read a four-byte unsigned integer."""
        return int.from_bytes(self._take(4, "u4"), "big")

    def read_u8(self) -> int:
        """Read an eight-byte unsigned integer."""
        return int.from_bytes(self._take(8, "u8"), "big")

    def read_bytes(self, length: int) -> bytes:
        """Read ``length`` raw bytes."""
        if length < 0:
            raise ValueError("length must not be negative")
        return self._take(length, f"{length} bytes")

    def at_end(self) -> bool:
        """True once every byte has been consumed."""
        return self.position >= len(self.data)

    def __repr__(self) -> str:
        return f"ByteReader(position={self.position}, size={len(self.data)})"