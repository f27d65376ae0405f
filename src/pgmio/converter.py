import argparse
import os
import sys

from dataclasses import dataclass

from PIL import Image
import numpy as np

from pgmio import codec
from pgmio.errors import PgmError
from pgmio.gray_image import GrayImage, MAXVAL
from pgmio.log import Log


def gray_from_argb(pixel: int) -> int:
    """ Gray level of a packed 0xAARRGGBB pixel, alpha is ignored """
    r = (pixel >> 16) & 0xff
    g = (pixel >> 8) & 0xff
    b = pixel & 0xff
    return (r + g + b) // 3


def to_grayscale(image: Image.Image) -> GrayImage:
    """
    Averages the red, green and blue channels of every pixel (floor division).
    The alpha channel has no place in a PGM image and is dropped.
    """
    rgba = np.array(image.convert('RGBA'), dtype=np.uint16)
    gray = (rgba[:, :, 0] + rgba[:, :, 1] + rgba[:, :, 2]) // 3

    width, height = image.size
    return GrayImage(width, height, MAXVAL, tuple(tuple(row) for row in gray.tolist()))


def encode_from_color_file(input_path, maxval: int = MAXVAL) -> bytes:
    with Image.open(input_path) as img:
        gray = to_grayscale(img)
    return codec.encode(gray, maxval)


def color_file_to_pgm(input_path, output_path, maxval: int = MAXVAL) -> GrayImage:
    with Image.open(input_path) as img:
        gray = to_grayscale(img)
    codec.write_file(gray, output_path, maxval)
    return gray


def pgm_to_file(input_path, output_path) -> GrayImage:
    gray = codec.read_file(input_path)
    gray.to_pil().save(output_path)
    return gray


@dataclass
class ConvertConfig:
    input_file: str
    output_file: str
    maxval: int

    @property
    def from_pgm(self):
        return os.path.splitext(self.input_file)[1].lower() == '.pgm'

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser):
        parser.add_argument('input_file', type=str, help='Image to convert, PGM files are exported via Pillow')
        parser.add_argument('output_file', type=str, help='Destination file')
        parser.add_argument('--maxval', '-m', type=int, default=MAXVAL,
                            help='Maximum gray value to declare when writing a PGM file')

    @staticmethod
    def from_args(args) -> 'ConvertConfig':
        return ConvertConfig(args.input_file, args.output_file, args.maxval)


def convert(config: ConvertConfig) -> GrayImage:
    if config.from_pgm:
        return pgm_to_file(config.input_file, config.output_file)
    return color_file_to_pgm(config.input_file, config.output_file, config.maxval)


def main(argv=None):
    parser = argparse.ArgumentParser('pgmio-convert')
    Log.add_args(parser)
    ConvertConfig.add_arguments(parser)

    args = parser.parse_args(argv)
    Log.setup(args)

    config = ConvertConfig.from_args(args)
    try:
        image = convert(config)
    except (PgmError, OSError, ValueError) as e:
        Log.error(f'Conversion failed: {e}')
        sys.exit(1)

    Log.info(f'Converted {config.input_file} to {config.output_file}')
    Log.info(f'Image dimensions: {image.width}x{image.height}')


if __name__ == '__main__':
    main()
