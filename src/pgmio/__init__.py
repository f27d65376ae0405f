from pgmio.codec import MAGIC, decode, encode, read, read_file, write, write_file
from pgmio.converter import color_file_to_pgm, encode_from_color_file, gray_from_argb, to_grayscale
from pgmio.errors import (
    DecodeError,
    EncodeError,
    FormatError,
    InvalidArgumentError,
    PgmError,
    PixelRangeError,
    TruncatedInputError,
)
from pgmio.gray_image import GrayImage, MAXVAL
