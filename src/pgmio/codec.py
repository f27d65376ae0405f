import io
import os
import re

from typing import BinaryIO, Callable, Optional, Sequence, Union

from pgmio import encoding
from pgmio.errors import FormatError, InvalidArgumentError, PgmError, TruncatedInputError
from pgmio.gray_image import GrayImage, MAXVAL
from pgmio.log import Log
from pgmio.tokenizer import next_token

MAGIC = 'P5'
RASTER_CHUNK_SIZE = 65536

_INTEGER = re.compile(r'[+-]?[0-9]+')

PathLike = Union[str, os.PathLike]
Grid = Union[GrayImage, Sequence[Sequence[int]]]
WrittenCallback = Callable[[str, int, int], None]


def _read_int(stream: BinaryIO, field: str) -> int:
    token = next_token(stream)
    if not _INTEGER.fullmatch(token):
        raise FormatError(f'Invalid {field} in the PGM header: {token!r}')
    return int(token)


def _read_raster(stream: BinaryIO, size: int) -> bytes:
    # The header decides `size`, so never ask the stream for more than one chunk at a time
    data = bytearray()
    while len(data) < size:
        chunk = stream.read(min(size - len(data), RASTER_CHUNK_SIZE))
        if not chunk:
            break
        data += chunk
    return bytes(data)


def read(stream: BinaryIO) -> GrayImage:
    """
    Decodes a single binary PGM image from `stream`.

    Header fields may be separated by any run of whitespace and '#' comments. The raster starts right after the
    single whitespace byte that ends the maxval field and is read as one byte per pixel.
    """
    if next_token(stream) != MAGIC:
        raise FormatError('Not a binary PGM image')

    width = _read_int(stream, 'width')
    height = _read_int(stream, 'height')
    maxval = _read_int(stream, 'maximum gray value')

    if width <= 0 or height <= 0:
        raise FormatError(f'Invalid image dimensions: {width}x{height}')

    if maxval < 0 or maxval > MAXVAL:
        raise FormatError(f"The image's maximum gray value must be in range [0, {MAXVAL}]")

    expected = width * height
    data = _read_raster(stream, expected)

    # Range errors on the pixels we did get take precedence over truncation
    rows = encoding.decode(data, width, maxval)
    if len(data) < expected:
        raise TruncatedInputError(expected, len(data))

    Log.debug(f'Decoded PGM image: {width}x{height}, maxval={maxval}')
    return GrayImage(width, height, maxval, rows)


def decode(data: bytes) -> GrayImage:
    return read(io.BytesIO(data))


def read_file(path: PathLike) -> GrayImage:
    with open(path, 'rb') as stream:
        try:
            return read(stream)
        except PgmError as e:
            e.path = os.fspath(path)
            raise


def _rows_of(image: Grid, maxval: int) -> Sequence[Sequence[int]]:
    if maxval > MAXVAL:
        raise InvalidArgumentError(f'The maximum gray value cannot exceed {MAXVAL}')

    rows = image.pixels if isinstance(image, GrayImage) else image
    if len(rows) == 0 or len(rows[0]) == 0:
        raise InvalidArgumentError('Image must have at least one row and one column')

    width = len(rows[0])
    for index, row in enumerate(rows):
        if len(row) != width:
            raise InvalidArgumentError(f'Row {index} has {len(row)} pixels, expected {width}')

    return rows


def write(image: Grid, stream: BinaryIO, maxval: int = MAXVAL) -> int:
    """
    Writes `image` to `stream` in the canonical binary PGM form and returns the number of bytes written.

    Pixels are checked row by row while writing: on a `PixelRangeError` the header and all preceding rows
    have already been written to `stream`.
    """
    rows = _rows_of(image, maxval)
    width, height = len(rows[0]), len(rows)

    header = f'{MAGIC}\n{width} {height}\n{maxval}\n'.encode('ascii')
    stream.write(header)
    written = len(header)

    for index, row in enumerate(rows):
        packed = encoding.encode(row, maxval, index)
        stream.write(packed)
        written += len(packed)

    return written


def encode(image: Grid, maxval: int = MAXVAL) -> bytes:
    stream = io.BytesIO()
    write(image, stream, maxval)
    return stream.getvalue()


def write_file(image: Grid, path: PathLike, maxval: int = MAXVAL, on_written: Optional[WrittenCallback] = None):
    """
    Writes `image` to the file at `path`. A failed write leaves whatever was written so far in the file.
    `on_written(path, width, height)` is called once the file is complete.
    """
    rows = _rows_of(image, maxval)
    path = os.fspath(path)

    with open(path, 'wb') as stream:
        try:
            write(rows, stream, maxval)
        except PgmError as e:
            e.path = path
            raise

    width, height = len(rows[0]), len(rows)
    Log.debug(f'PGM image written: {path}, {width}x{height}')
    if on_written is not None:
        on_written(path, width, height)
