from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from io import BytesIO
from struct import error, pack, unpack
from typing import Any, NamedTuple, Union

from . import constants
from .constants import (
    FIELD_DESCRIPTOR_FORMAT,
    FIELD_DESCRIPTOR_SIZE,
    FIELD_NAME_LENGTH,
)
from .exceptions import FieldNameTooLong, ShapefileException
from .geometric_calculations import (
    bbox_contains,
    bbox_from_points,
    bbox_overlap,
    bbox_union,
)
from .helpers import read_exactly, write_checked
from .types import (
    FIELD_TYPE_ALIASES,
    BBox,
    FieldType,
    FieldTypeT,
    Point2D,
    ReadableBinStream,
    WriteableBinStream,
)

logger = logging.getLogger(__name__)


class Box:
    """An axis aligned bounding rectangle.

    A Box unpacks like pyshp's bbox tuples, (xmin, ymin, xmax, ymax), and
    compares equal to any 4-tuple holding the same numbers. It is only ever
    changed in place by extend(), which can grow it but never shrink it.

    >>> b = Box(0.0, 0.0, 1.0, 1.0)
    >>> b.extend(Box(-1.0, 0.5, 0.5, 3.0))
    >>> b
    Box(xmin=-1.0, ymin=0.0, xmax=1.0, ymax=3.0)
    """

    __slots__ = ("xmin", "ymin", "xmax", "ymax")

    def __init__(
        self,
        xmin: float = 0.0,
        ymin: float = 0.0,
        xmax: float = 0.0,
        ymax: float = 0.0,
    ):
        self.xmin = xmin
        self.ymin = ymin
        self.xmax = xmax
        self.ymax = ymax

    @classmethod
    def from_points(cls, points: Iterable[Point2D]) -> Box:
        """The smallest Box covering points. (0, 0, 0, 0) if there are none."""
        return cls(*bbox_from_points(points))

    def extend(self, other: Box | BBox) -> None:
        """Widens this box, in place, to also cover other."""
        self.xmin, self.ymin, self.xmax, self.ymax = bbox_union(
            tuple(self), tuple(other)  # type: ignore[arg-type]
        )

    def overlaps(self, other: Box | BBox) -> bool:
        return bbox_overlap(tuple(self), tuple(other))  # type: ignore[arg-type]

    def contains(self, other: Box | BBox) -> bool:
        return bbox_contains(tuple(self), tuple(other))  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[float]:
        return iter((self.xmin, self.ymin, self.xmax, self.ymax))

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Box):
            return tuple(self) == tuple(other)
        if isinstance(other, (tuple, list)):
            return tuple(self) == tuple(other)
        return NotImplemented

    # Mutable, via extend()
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Box(xmin={self.xmin!r}, ymin={self.ymin!r}, xmax={self.xmax!r}, ymax={self.ymax!r})"


_EMPTY_ADDR = b"\x00" * 4
_EMPTY_PADDING = b"\x00" * 14


def _encode_field_name(
    name: str | bytes,
    encoding: str,
    encodingErrors: str,
    strict: bool,
) -> bytes:
    encoded_name = (
        name if isinstance(name, bytes) else str(name).encode(encoding, encodingErrors)
    )
    if len(encoded_name) > FIELD_NAME_LENGTH:
        if strict:
            raise FieldNameTooLong(
                f"Field name {name!r} is {len(encoded_name)} bytes long, "
                f"the limit is {FIELD_NAME_LENGTH}."
            )
        if constants.VERBOSE:
            logger.warning(
                "Field name %r truncated to %d bytes: %r",
                name,
                FIELD_NAME_LENGTH,
                encoded_name[:FIELD_NAME_LENGTH],
            )
    return encoded_name[:FIELD_NAME_LENGTH].ljust(FIELD_NAME_LENGTH, b"\x00")


class Field(NamedTuple):
    """A DBF column descriptor, stored exactly as it appears on disk.

    name is the 11 byte, NUL padded name buffer. addr and padding are the
    reserved regions of the descriptor, kept so that a decoded descriptor
    writes back byte for byte. Build new descriptors with string_field(),
    number_field(), float_field(), date_field() or Field.from_unchecked().
    """

    name: bytes
    field_type: FieldTypeT
    size: int
    decimal: int
    addr: bytes = _EMPTY_ADDR
    padding: bytes = _EMPTY_PADDING

    @classmethod
    def from_unchecked(
        cls,
        name: str | bytes,
        field_type: str | bytes | FieldTypeT = "C",
        size: int = 50,
        decimal: int = 0,
        *,
        encoding: str = "utf-8",
        encodingErrors: str = "strict",
        strict: bool = False,
    ) -> Field:
        try:
            type_ = FIELD_TYPE_ALIASES[field_type]
        except KeyError:
            raise ShapefileException(
                f"field_type must be in {FieldType.__members__}. Got: {field_type=}. "
            )

        if type_ is FieldType.D:
            size = 8
            decimal = 0
        elif type_ is FieldType.L:
            size = 1
            decimal = 0

        return cls(
            name=_encode_field_name(name, encoding, encodingErrors, strict),
            field_type=type_,
            size=int(size),
            decimal=int(decimal),
        )

    def decoded_name(
        self, encoding: str = "utf-8", encodingErrors: str = "strict"
    ) -> str:
        """The name up to its first NUL byte, as text."""
        return self.name.split(b"\x00", 1)[0].decode(encoding, encodingErrors)

    @classmethod
    def from_byte_stream(cls, b_io: ReadableBinStream) -> Field:
        encoded_field_tuple: tuple[bytes, bytes, bytes, int, int, bytes] = unpack(
            FIELD_DESCRIPTOR_FORMAT,
            read_exactly(b_io, FIELD_DESCRIPTOR_SIZE, "field descriptor"),
        )
        name, encoded_type_char, addr, size, decimal, padding = encoded_field_tuple
        try:
            field_type = FIELD_TYPE_ALIASES[encoded_type_char]
        except KeyError:
            raise ShapefileException(
                f"Unknown type {encoded_type_char!r} in descriptor of field {name!r}."
            )
        return cls(name, field_type, size, decimal, addr, padding)

    def write_to_byte_stream(self, b_io: WriteableBinStream) -> int:
        try:
            fld = pack(
                FIELD_DESCRIPTOR_FORMAT,
                self.name,
                self.field_type.encode("ascii"),
                self.addr,
                self.size,
                self.decimal,
                self.padding,
            )
        except error:
            raise ShapefileException(
                f"Failed to pack descriptor of field {self.name!r}. "
                "Size and decimal must be integers from 0 to 255."
            )
        return write_checked(b_io, fld, f"descriptor of field {self.name!r}")

    @classmethod
    def from_bytes(cls, data: bytes) -> Field:
        return cls.from_byte_stream(BytesIO(data))

    def to_bytes(self) -> bytes:
        b_io = BytesIO()
        self.write_to_byte_stream(b_io)
        return b_io.getvalue()

    def __str__(self) -> str:
        return self.decoded_name(encodingErrors="replace")

    def __repr__(self) -> str:
        return f'Field(name="{self}", field_type=FieldType.{self.field_type}, size={self.size}, decimal={self.decimal})'


FieldNameT = Union[str, bytes]


def string_field(
    name: FieldNameT, size: int, *, strict: bool = False, encoding: str = "utf-8"
) -> Field:
    """A character (C) field holding up to size bytes of text."""
    return Field.from_unchecked(
        name, FieldType.C, size, 0, encoding=encoding, strict=strict
    )


def number_field(
    name: FieldNameT, size: int, *, strict: bool = False, encoding: str = "utf-8"
) -> Field:
    """A numeric (N) field of size digits, with no decimals."""
    return Field.from_unchecked(
        name, FieldType.N, size, 0, encoding=encoding, strict=strict
    )


def float_field(
    name: FieldNameT,
    size: int,
    decimal: int,
    *,
    strict: bool = False,
    encoding: str = "utf-8",
) -> Field:
    """A floating point (F) field of size characters, decimal of them
    after the decimal point."""
    return Field.from_unchecked(
        name, FieldType.F, size, decimal, encoding=encoding, strict=strict
    )


def date_field(
    name: FieldNameT, *, strict: bool = False, encoding: str = "utf-8"
) -> Field:
    """A date (D) field. Dates are stored as YYYYMMDD, so the size is always 8."""
    return Field.from_unchecked(
        name, FieldType.D, 8, 0, encoding=encoding, strict=strict
    )
