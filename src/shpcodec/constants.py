from __future__ import annotations

# Module settings
VERBOSE = True

# Largest single read() issued while decoding part and point arrays
READ_CHUNK_SIZE = 65536

# Constants for shape types
NULL = 0
POINT = 1
POLYLINE = 3
POLYGON = 5
MULTIPOINT = 8
POINTZ = 11
POLYLINEZ = 13
POLYGONZ = 15
MULTIPOINTZ = 18
POINTM = 21
POLYLINEM = 23
POLYGONM = 25
MULTIPOINTM = 28
MULTIPATCH = 31

SHAPETYPE_LOOKUP = {
    NULL: "NULL",
    POINT: "POINT",
    POLYLINE: "POLYLINE",
    POLYGON: "POLYGON",
    MULTIPOINT: "MULTIPOINT",
    POINTZ: "POINTZ",
    POLYLINEZ: "POLYLINEZ",
    POLYGONZ: "POLYGONZ",
    MULTIPOINTZ: "MULTIPOINTZ",
    POINTM: "POINTM",
    POLYLINEM: "POLYLINEM",
    POLYGONM: "POLYGONM",
    MULTIPOINTM: "MULTIPOINTM",
    MULTIPATCH: "MULTIPATCH",
}

SHAPETYPENUM_LOOKUP = {name: code for code, name in SHAPETYPE_LOOKUP.items()}

# Wire sizes, in bytes
BBOX_SIZE = 32  # <4d
COUNT_SIZE = 4  # <i
PART_INDEX_SIZE = 4  # <i
POINT_SIZE = 16  # <2d

# DBF field descriptor layout
FIELD_NAME_LENGTH = 11
FIELD_DESCRIPTOR_SIZE = 32
FIELD_DESCRIPTOR_FORMAT = "<11sc4sBB14s"
