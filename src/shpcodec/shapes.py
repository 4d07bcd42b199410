from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from io import BytesIO
from struct import error, pack, unpack
from typing import Any

from .classes import Box
from .constants import (
    BBOX_SIZE,
    COUNT_SIZE,
    NULL,
    PART_INDEX_SIZE,
    POINT,
    POINT_SIZE,
    POLYGON,
    POLYLINE,
    SHAPETYPE_LOOKUP,
)
from .exceptions import ShapefileException
from .helpers import check_array_lengths, read_exactly, write_checked
from .types import (
    BBox,
    Point2D,
    PointsT,
    ReadableBinStream,
    WriteableBinStream,
)

logger = logging.getLogger(__name__)


class Shape:
    """Base class of the geometry record bodies.

    Every shape type provides the same three operations:
    the bbox property, computed from the shape's own coordinates,
    from_byte_stream(), which decodes a record body from a stream
    positioned just after the record's shape type, and
    write_to_byte_stream(), its exact inverse. The shape type itself,
    and the record header around it, belong to the container format.
    """

    shapeType: int = NULL

    def __init__(self, oid: int | None = None):
        self.__oid: int = -1 if oid is None else oid

    @property
    def oid(self) -> int:
        """The index position of the shape in the original shapefile"""
        return self.__oid

    @property
    def shapeTypeName(self) -> str:
        return SHAPETYPE_LOOKUP[self.shapeType]

    @property
    def bbox(self) -> Box:
        raise NotImplementedError

    @classmethod
    def from_byte_stream(
        cls,
        b_io: ReadableBinStream,
        oid: int | None = None,
    ) -> Shape:
        raise NotImplementedError

    @staticmethod
    def write_to_byte_stream(
        b_io: WriteableBinStream,
        s: Shape,
        i: int = 0,
    ) -> int:
        raise NotImplementedError

    @classmethod
    def from_bytes(cls, data: bytes, oid: int | None = None) -> Shape:
        return cls.from_byte_stream(BytesIO(data), oid=oid)

    def to_bytes(self, i: int = 0) -> bytes:
        b_io = BytesIO()
        ShapeClass = SHAPE_CLASS_FROM_SHAPETYPE[self.shapeType]
        ShapeClass.write_to_byte_stream(b_io=b_io, s=self, i=i)
        return b_io.getvalue()

    def _fields(self) -> tuple[Any, ...]:
        return ()

    def __eq__(self, other: Any) -> bool:
        # A Polygon never equals a Polyline, even with the same coordinates
        if type(self) is not type(other):
            return NotImplemented
        return self._fields() == other._fields()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        class_name = self.__class__.__name__
        if class_name == "Shape":
            return f"Shape #{self.__oid}: {self.shapeTypeName}"
        return f"{class_name} #{self.__oid}"


# Need unused arguments to keep the same call signature for
# different implementations of from_byte_stream and write_to_byte_stream
class NullShape(Shape):
    shapeType = NULL

    @property
    def bbox(self) -> Box:
        return Box(0.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_byte_stream(
        cls,
        b_io: ReadableBinStream,
        oid: int | None = None,
    ) -> NullShape:
        # A null record has no body
        return cls(oid=oid)

    @staticmethod
    def write_to_byte_stream(
        b_io: WriteableBinStream,
        s: Shape,
        i: int = 0,
    ) -> int:
        return 0


class Point(Shape):
    shapeType = POINT

    def __init__(
        self,
        x: float,
        y: float,
        oid: int | None = None,
    ):
        Shape.__init__(self, oid=oid)
        self.x = x
        self.y = y

    @property
    def bbox(self) -> Box:
        # create bounding box for Point by duplicating coordinates
        return Box(self.x, self.y, self.x, self.y)

    @staticmethod
    def _x_y_from_byte_stream(b_io: ReadableBinStream) -> tuple[float, float]:
        x, y = unpack("<2d", read_exactly(b_io, POINT_SIZE, "point"))
        return x, y

    @staticmethod
    def _write_x_y_to_byte_stream(
        b_io: WriteableBinStream, x: float, y: float, i: int
    ) -> int:
        try:
            data = pack("<2d", x, y)
        except error:
            raise ShapefileException(
                f"Failed to write point for record {i}. Expected floats."
            )
        return write_checked(b_io, data, f"point for record {i}")

    @classmethod
    def from_byte_stream(
        cls,
        b_io: ReadableBinStream,
        oid: int | None = None,
    ) -> Point:
        x, y = cls._x_y_from_byte_stream(b_io)
        return cls(x=x, y=y, oid=oid)

    @staticmethod
    def write_to_byte_stream(b_io: WriteableBinStream, s: Shape, i: int = 0) -> int:
        # Serialize a single point
        p: Point = s  # type: ignore[assignment]
        return Point._write_x_y_to_byte_stream(b_io, p.x, p.y, i)

    def __iter__(self) -> Iterator[float]:
        # Lets a Point stand in for an (x, y) pair
        return iter((self.x, self.y))

    def _fields(self) -> tuple[Any, ...]:
        return self.x, self.y

    def __repr__(self) -> str:
        return f"Point #{self.oid}: ({self.x!r}, {self.y!r})"


class _CanHaveParts(Shape):
    """The layout shared by Polyline and Polygon: a stored bounding box,
    the number of parts and points, the index of the first point of
    each part, then the points themselves.
    """

    def __init__(
        self,
        *args: PointsT,
        lines: list[PointsT] | None = None,
        points: Iterable[Point2D] | None = None,
        parts: Sequence[int] | None = None,  # index of start point of each part
        box: Box | BBox | None = None,
        oid: int | None = None,
    ):
        """Lines allows the points-lists and parts to be denoted together
        in one argument, either as positional args or as the keyword arg
        lines. Otherwise points is the flat list of vertices and parts the
        index of the first vertex of each part; points with no parts are
        a single part. box is the bounding box stored with the record,
        and is computed from the points if not given.
        """
        Shape.__init__(self, oid=oid)

        if args:
            if lines:
                raise ShapefileException(
                    "Specify Either: a) positional args, or: b) the keyword arg lines. "
                    f"Not both.  Got both: {args} and {lines=}. "
                    "If this was intentional, after the other positional args, "
                    "the arg passed to lines can be unpacked (arg1, arg2, *more_args, *lines, oid=oid,...)"
                )
            lines = list(args)

        if lines is not None:
            lines = self._prepare_lines(lines)
            points, parts = self._points_and_parts_indexes_from_lines(lines)

        self.points: PointsT = [(x, y) for x, y in points or ()]

        if parts is None:
            parts = [0] if self.points else []
        self.parts: list[int] = list(parts)

        if box is not None:
            self.box = Box(*box)
        else:
            self.box = Box.from_points(self.points)

    def _prepare_lines(self, lines: list[PointsT]) -> list[PointsT]:
        return lines

    @staticmethod
    def _points_and_parts_indexes_from_lines(
        parts: list[PointsT],
    ) -> tuple[PointsT, list[int]]:
        """From a list of parts (each part a list of points) return
        a flattened list of points, and a list of indexes into that
        flattened list corresponding to the start of each part.
        """
        part_indexes: list[int] = []
        points: PointsT = []

        for part in parts:
            # set part index position
            part_indexes.append(len(points))
            points.extend(part)

        return points, part_indexes

    @property
    def numParts(self) -> int:
        return len(self.parts)

    @property
    def numPoints(self) -> int:
        return len(self.points)

    @property
    def bbox(self) -> Box:
        """The bounding box of the points. The stored box, as read
        from or written to the record, is self.box."""
        return Box.from_points(self.points)

    @property
    def lines(self) -> list[PointsT]:
        """The points split into one list per part."""
        ends = list(self.parts[1:]) + [len(self.points)]
        return [self.points[start:end] for start, end in zip(self.parts, ends)]

    @staticmethod
    def _read_bbox_from_byte_stream(b_io: ReadableBinStream) -> BBox:
        return unpack("<4d", read_exactly(b_io, BBOX_SIZE, "bounding box"))

    @staticmethod
    def _write_bbox_to_byte_stream(
        b_io: WriteableBinStream, i: int, bbox: Box | BBox | None
    ) -> int:
        if bbox is None or len(tuple(bbox)) != 4:
            raise ShapefileException(f"Four numbers required for bbox. Got: {bbox}")
        try:
            data = pack("<4d", *bbox)
        except error:
            raise ShapefileException(
                f"Failed to write bounding box for record {i}. Expected floats."
            )
        return write_checked(b_io, data, f"bounding box for record {i}")

    @staticmethod
    def _read_counts_from_byte_stream(b_io: ReadableBinStream) -> tuple[int, int]:
        nParts, nPoints = unpack("<2i", read_exactly(b_io, 2 * COUNT_SIZE, "counts"))
        return nParts, nPoints

    @staticmethod
    def _write_counts_to_byte_stream(
        b_io: WriteableBinStream, s: _CanHaveParts, i: int
    ) -> int:
        try:
            data = pack("<2i", len(s.parts), len(s.points))
        except error:
            raise ShapefileException(
                f"Too many parts or points in record {i} for a 32 bit count."
            )
        return write_checked(b_io, data, f"part and point counts for record {i}")

    @staticmethod
    def _read_parts_from_byte_stream(
        b_io: ReadableBinStream, nParts: int
    ) -> list[int]:
        data = read_exactly(b_io, nParts * PART_INDEX_SIZE, "part indexes")
        return list(unpack(f"<{nParts}i", data))

    @staticmethod
    def _write_part_indices_to_byte_stream(
        b_io: WriteableBinStream, s: _CanHaveParts, i: int
    ) -> int:
        try:
            data = pack(f"<{len(s.parts)}i", *s.parts)
        except error:
            raise ShapefileException(
                f"Failed to write part indexes for record {i}. Expected 32 bit ints."
            )
        return write_checked(b_io, data, f"part indexes for record {i}")

    @staticmethod
    def _read_points_from_byte_stream(
        b_io: ReadableBinStream, nPoints: int
    ) -> list[Point2D]:
        data = read_exactly(b_io, nPoints * POINT_SIZE, "points")
        flat = unpack(f"<{2 * nPoints}d", data)
        return list(zip(*(iter(flat),) * 2))

    @staticmethod
    def _write_points_to_byte_stream(
        b_io: WriteableBinStream, s: _CanHaveParts, i: int
    ) -> int:
        x_ys: list[float] = []
        for point in s.points:
            x_ys.extend(point[:2])
        try:
            data = pack(f"<{len(x_ys)}d", *x_ys)
        except error:
            raise ShapefileException(
                f"Failed to write points for record {i}. Expected floats."
            )
        return write_checked(b_io, data, f"points for record {i}")

    @classmethod
    def from_byte_stream(
        cls,
        b_io: ReadableBinStream,
        oid: int | None = None,
    ) -> _CanHaveParts:
        box = cls._read_bbox_from_byte_stream(b_io)
        nParts, nPoints = cls._read_counts_from_byte_stream(b_io)

        # Validate the declared counts before reading (or allocating) the arrays
        check_array_lengths(b_io, nParts, nPoints, PART_INDEX_SIZE, POINT_SIZE)

        parts = cls._read_parts_from_byte_stream(b_io, nParts)
        points = cls._read_points_from_byte_stream(b_io, nPoints)

        shape = cls(points=points, parts=parts, box=box, oid=oid)
        if points and shape.bbox != shape.box:
            logger.debug(
                "Stored bounding box %s of %s differs from its points' bounding box %s",
                tuple(shape.box),
                shape,
                tuple(shape.bbox),
            )
        return shape

    @staticmethod
    def write_to_byte_stream(
        b_io: WriteableBinStream,
        s: Shape,
        i: int = 0,
    ) -> int:
        # Static, so that Polyline and Polygon write through
        # exactly the same code.
        shape: _CanHaveParts = s  # type: ignore[assignment]

        n = _CanHaveParts._write_bbox_to_byte_stream(b_io, i, shape.box)
        n += _CanHaveParts._write_counts_to_byte_stream(b_io, shape, i)
        n += _CanHaveParts._write_part_indices_to_byte_stream(b_io, shape, i)
        n += _CanHaveParts._write_points_to_byte_stream(b_io, shape, i)
        return n

    def _fields(self) -> tuple[Any, ...]:
        return tuple(self.box), self.parts, self.points


class Polyline(_CanHaveParts):
    shapeType = POLYLINE


class Polygon(_CanHaveParts):
    shapeType = POLYGON

    def _prepare_lines(self, lines: list[PointsT]) -> list[PointsT]:
        # Only rings given as lines are closed; points and parts are kept as given
        lines = [list(line) for line in lines]
        self._ensure_polygon_rings_closed(lines)
        return lines

    @staticmethod
    def _ensure_polygon_rings_closed(
        parts: list[PointsT],  # Mutated
    ) -> None:
        for part in parts:
            if part and part[0] != part[-1]:
                part.append(part[0])


SHAPE_CLASS_FROM_SHAPETYPE: dict[int, type[Shape]] = {
    NULL: NullShape,
    POINT: Point,
    POLYLINE: Polyline,
    POLYGON: Polygon,
}


def shape_from_byte_stream(
    shapeType: int,
    b_io: ReadableBinStream,
    oid: int | None = None,
) -> Shape:
    """Decodes a record body of the given shape type. The caller reads
    the shape type from the record, and leaves b_io just after it."""
    try:
        ShapeClass = SHAPE_CLASS_FROM_SHAPETYPE[shapeType]
    except KeyError:
        if shapeType in SHAPETYPE_LOOKUP:
            raise ShapefileException(
                f"Shape type {SHAPETYPE_LOOKUP[shapeType]} ({shapeType}) is not supported."
            )
        raise ShapefileException(f"Unknown shape type: {shapeType}.")
    return ShapeClass.from_byte_stream(b_io, oid=oid)
