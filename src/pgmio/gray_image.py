from dataclasses import dataclass
from numbers import Integral
from typing import Sequence, Tuple

from PIL import Image
import numpy as np

from pgmio.errors import InvalidArgumentError, PixelRangeError

MAXVAL = 255


@dataclass(frozen=True)
class GrayImage:
    """
    A rectangular grid of gray levels, stored row-major as nested tuples: `pixels[row][column]`.
    Every pixel lies in [0, maxval].
    """

    width: int
    height: int
    maxval: int
    pixels: Tuple[Tuple[int, ...], ...]

    @staticmethod
    def from_rows(rows: Sequence[Sequence[int]], maxval: int = MAXVAL) -> 'GrayImage':
        if maxval < 0 or maxval > MAXVAL:
            raise InvalidArgumentError(f'The maximum gray value must be in range [0, {MAXVAL}]')

        if len(rows) == 0 or len(rows[0]) == 0:
            raise InvalidArgumentError('Image must have at least one row and one column')

        width = len(rows[0])
        pixels = []
        for row_index, row in enumerate(rows):
            if len(row) != width:
                raise InvalidArgumentError(f'Row {row_index} has {len(row)} pixels, expected {width}')

            for column, value in enumerate(row):
                if not isinstance(value, Integral):
                    raise InvalidArgumentError(f'Pixel value at ({row_index}, {column}) must be an integer')
                if value < 0 or value > maxval:
                    raise PixelRangeError(value, maxval, row_index, column)

            pixels.append(tuple(int(x) for x in row))

        return GrayImage(width, len(pixels), maxval, tuple(pixels))

    @staticmethod
    def from_array(array: np.ndarray, maxval: int = MAXVAL) -> 'GrayImage':
        if array.ndim != 2:
            raise InvalidArgumentError(f'Expected a two-dimensional array, got {array.ndim} dimensions')
        return GrayImage.from_rows(array.tolist(), maxval)

    def to_array(self) -> np.ndarray:
        return np.array(self.pixels, dtype=np.uint8).reshape(self.height, self.width)

    def to_pil(self) -> Image.Image:
        return Image.frombytes('L', (self.width, self.height), self.to_array().tobytes())
