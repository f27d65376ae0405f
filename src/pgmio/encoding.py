from enum import Enum
from numbers import Integral
from typing import Sequence, Tuple

import struct

from pgmio.errors import InvalidArgumentError, PixelRangeError


class Format(Enum):
    u8 = 'B'


# A single unsigned byte per pixel, so byte order never matters
SAMPLE_FORMAT = Format.u8
SAMPLE_MAX = 2 ** 8 - 1


def encode(row: Sequence[int], maxval: int, row_index: int = 0) -> bytes:
    """
    Packs one raster row, checking every pixel against `maxval` first.
    """
    for column, value in enumerate(row):
        if not isinstance(value, Integral):
            raise InvalidArgumentError(f'Pixel value at ({row_index}, {column}) must be an integer, got {value!r}')

        if value < 0 or value > maxval:
            raise PixelRangeError(value, maxval, row_index, column)

    return struct.pack(f'{len(row)}{SAMPLE_FORMAT.value}', *row)


def decode(data: bytes, width: int, maxval: int) -> Tuple[Tuple[int, ...], ...]:
    """
    Unpacks raw raster bytes into rows of `width` pixels, in raster order.
    A short trailing row is kept as-is, detecting truncation is up to the caller.
    """
    values = struct.unpack(f'{len(data)}{SAMPLE_FORMAT.value}', data)

    for index, value in enumerate(values):
        if value > maxval:
            raise PixelRangeError(value, maxval, index // width, index % width)

    return tuple(values[start:start + width] for start in range(0, len(values), width))
