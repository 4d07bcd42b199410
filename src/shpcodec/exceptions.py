class ShapefileException(Exception):
    """An exception to handle shapefile specific problems."""


class TruncatedInput(ShapefileException):
    """The byte stream ended before a field or array was complete."""


class InvalidLength(TruncatedInput):
    """A declared part or point count is negative, or asks for more
    bytes than the stream has left."""


class WriteFailure(ShapefileException):
    """The output stream refused some or all of the bytes written to it."""


class FieldNameTooLong(ShapefileException):
    pass
