"""
shpcodec
Reads and writes the bodies of ESRI Shapefile geometry records
(Null, Point, PolyLine and Polygon) and DBF field descriptors.
Compatible with Python versions >=3.9
"""

from __future__ import annotations

import logging
import sys

from .__version__ import __version__
from ._doctest_runner import _test
from .classes import (
    Box,
    Field,
    date_field,
    float_field,
    number_field,
    string_field,
)
from .constants import (
    MULTIPATCH,
    MULTIPOINT,
    MULTIPOINTM,
    MULTIPOINTZ,
    NULL,
    POINT,
    POINTM,
    POINTZ,
    POLYGON,
    POLYGONM,
    POLYGONZ,
    POLYLINE,
    POLYLINEM,
    POLYLINEZ,
    SHAPETYPE_LOOKUP,
    SHAPETYPENUM_LOOKUP,
)
from .exceptions import (
    FieldNameTooLong,
    InvalidLength,
    ShapefileException,
    TruncatedInput,
    WriteFailure,
)
from .geometric_calculations import (
    bbox_contains,
    bbox_from_points,
    bbox_overlap,
    bbox_union,
)
from .shapes import (
    SHAPE_CLASS_FROM_SHAPETYPE,
    NullShape,
    Point,
    Polygon,
    Polyline,
    Shape,
    shape_from_byte_stream,
)
from .types import (
    FIELD_TYPE_ALIASES,
    BBox,
    FieldType,
    FieldTypeT,
    Point2D,
    PointsT,
    ReadableBinStream,
    ReadSeekableBinStream,
    WriteableBinStream,
)

__all__ = [
    "__version__",
    "NULL",
    "POINT",
    "POLYLINE",
    "POLYGON",
    "MULTIPOINT",
    "POINTZ",
    "POLYLINEZ",
    "POLYGONZ",
    "MULTIPOINTZ",
    "POINTM",
    "POLYLINEM",
    "POLYGONM",
    "MULTIPOINTM",
    "MULTIPATCH",
    "SHAPETYPE_LOOKUP",
    "SHAPETYPENUM_LOOKUP",
    "Box",
    "Shape",
    "NullShape",
    "Point",
    "Polyline",
    "Polygon",
    "SHAPE_CLASS_FROM_SHAPETYPE",
    "shape_from_byte_stream",
    "Field",
    "string_field",
    "number_field",
    "float_field",
    "date_field",
    "Point2D",
    "PointsT",
    "BBox",
    "WriteableBinStream",
    "ReadableBinStream",
    "ReadSeekableBinStream",
    "FieldTypeT",
    "FieldType",
    "FIELD_TYPE_ALIASES",
    "ShapefileException",
    "TruncatedInput",
    "InvalidLength",
    "WriteFailure",
    "FieldNameTooLong",
    "bbox_from_points",
    "bbox_overlap",
    "bbox_contains",
    "bbox_union",
]

logger = logging.getLogger(__name__)


def main() -> None:
    """
    Doctests are contained in the file 'README.md', and are tested using the built-in
    testing libraries.
    """
    failure_count = _test()
    sys.exit(failure_count)
