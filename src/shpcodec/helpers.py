from __future__ import annotations

import io

from . import constants
from .exceptions import InvalidLength, TruncatedInput, WriteFailure
from .types import ReadableBinStream, ReadSeekableBinStream, WriteableBinStream

# Helpers


def read_exactly(b_io: ReadableBinStream, size: int, what: str) -> bytes:
    """Reads exactly size bytes from b_io, or raises TruncatedInput.

    Large reads are split into calls of at most READ_CHUNK_SIZE bytes,
    so a bogus size on a stream that cannot report its length only
    costs as much memory as the data that actually arrives.
    """
    chunks: list[bytes] = []
    remaining = size
    while remaining > 0:
        chunk = b_io.read(min(remaining, constants.READ_CHUNK_SIZE))
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    data = b"".join(chunks)
    if len(data) != size:
        raise TruncatedInput(
            f"Unexpected end of data reading {what}: expected {size} bytes, got {len(data)}."
        )
    return data


def remaining_bytes(
    b_io: ReadableBinStream | ReadSeekableBinStream,
) -> int | None:
    """Returns the number of bytes left in b_io, or None for streams
    that cannot seek."""
    seekable = getattr(b_io, "seekable", None)
    if seekable is not None and not seekable():
        return None
    try:
        position = b_io.tell()  # type: ignore[attr-defined]
        b_io.seek(0, io.SEEK_END)  # type: ignore[attr-defined]
        end = b_io.tell()  # type: ignore[attr-defined]
        b_io.seek(position)  # type: ignore[attr-defined]
    except (AttributeError, OSError):
        return None
    return end - position


def check_array_lengths(
    b_io: ReadableBinStream, nParts: int, nPoints: int, part_size: int, point_size: int
) -> None:
    """Rejects declared counts that are negative or that need more
    bytes than are left in the stream, before anything is allocated."""
    if nParts < 0:
        raise InvalidLength(f"Negative number of parts: {nParts}.")
    if nPoints < 0:
        raise InvalidLength(f"Negative number of points: {nPoints}.")

    needed = nParts * part_size + nPoints * point_size
    available = remaining_bytes(b_io)
    if available is not None and needed > available:
        raise InvalidLength(
            f"Record declares {nParts} parts and {nPoints} points ({needed} bytes), "
            f"but only {available} bytes remain."
        )


def write_checked(b_io: WriteableBinStream, data: bytes, what: str) -> int:
    """Writes data to b_io, turning stream errors and short writes
    into WriteFailure. Returns the number of bytes written."""
    try:
        n = b_io.write(data)
    except (OSError, ValueError) as e:
        raise WriteFailure(f"Failed to write {what}: {e}") from e
    # Unbuffered raw streams may return None, meaning nothing could be written yet
    if n is None or n < len(data):
        raise WriteFailure(
            f"Failed to write {what}: {len(data)} bytes given, {n or 0} written."
        )
    return n
