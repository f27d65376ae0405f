import io

import pytest

from pgmio import codec
from pgmio.errors import FormatError, InvalidArgumentError, PixelRangeError, TruncatedInputError
from pgmio.gray_image import GrayImage


def test_canonical_output():
    assert codec.encode([[7, 9]]) == b'P5\n2 1\n255\n\x07\x09'


def test_encode_gray_image_with_maxval():
    image = GrayImage.from_rows([[0, 3], [2, 1]], maxval=3)
    assert codec.encode(image, maxval=3) == b'P5\n2 2\n3\n\x00\x03\x02\x01'


@pytest.mark.parametrize('maxval', [255, 200, 10])
def test_round_trip(maxval):
    image = GrayImage.from_rows([[0, 1, 2, 3], [10, 9, 8, 7], [5, 5, 5, 5]], maxval=maxval)
    decoded = codec.decode(codec.encode(image, maxval))
    assert decoded == image
    assert (decoded.width, decoded.height) == (4, 3)


@pytest.mark.parametrize('magic', [b'P6', b'P2', b'P4', b'XX', b'p5'])
def test_magic_rejection(magic):
    with pytest.raises(FormatError):
        codec.decode(magic + b'\n1 1\n255\n\x00')


def test_decode_pixel_above_maxval():
    with pytest.raises(PixelRangeError) as error:
        codec.decode(b'P5\n2 1\n10\n' + bytes([5, 20]))
    assert (error.value.value, error.value.row, error.value.column) == (20, 0, 1)


def test_decode_truncated_raster():
    with pytest.raises(TruncatedInputError) as error:
        codec.decode(b'P5\n3 3\n255\n' + bytes(5))
    assert (error.value.expected, error.value.received) == (9, 5)


def test_range_error_reported_before_truncation():
    with pytest.raises(PixelRangeError):
        codec.decode(b'P5\n3 3\n10\n' + bytes([1, 50]))


def test_decode_comment_line():
    image = codec.decode(b'P5\n#comment here\n2 2\n255\n' + bytes([1, 2, 3, 4]))
    assert image.pixels == ((1, 2), (3, 4))
    assert image.maxval == 255


def test_decode_lenient_whitespace():
    image = codec.decode(b'P5  \t\n3\n\n2   255\r' + bytes(range(6)))
    assert (image.width, image.height) == (3, 2)
    assert image.pixels == ((0, 1, 2), (3, 4, 5))


def test_raster_is_not_tokenized():
    image = codec.decode(b'P5\n2 1\n255\n#\n')
    assert image.pixels == ((ord('#'), ord('\n')),)


def test_trailing_bytes_are_ignored():
    assert codec.decode(b'P5\n1 1\n255\n\x05extra').pixels == ((5,),)


@pytest.mark.parametrize('data', [
    b'P5\nabc 2\n255\n',
    b'P5\n2 2.5\n255\n',
    b'P5\n2 2\nmax\n',
    b'P5\n2',
    b'',
])
def test_decode_bad_header(data):
    with pytest.raises(FormatError):
        codec.decode(data)


@pytest.mark.parametrize('maxval', [b'256', b'-1'])
def test_decode_maxval_out_of_range(maxval):
    with pytest.raises(FormatError):
        codec.decode(b'P5\n1 1\n' + maxval + b'\n\x00')


@pytest.mark.parametrize('size', [b'0 1', b'1 0', b'-2 2'])
def test_decode_bad_dimensions(size):
    with pytest.raises(FormatError):
        codec.decode(b'P5\n' + size + b'\n255\n\x00')


def test_encode_pixel_out_of_range():
    with pytest.raises(PixelRangeError) as error:
        codec.encode([[1, 300]])
    assert (error.value.value, error.value.maxval) == (300, 255)


def test_encode_maxval_ceiling():
    with pytest.raises(InvalidArgumentError):
        codec.encode([[1]], maxval=256)
    assert codec.encode([[1]], maxval=255) == b'P5\n1 1\n255\n\x01'


def test_invalid_argument_is_value_error():
    with pytest.raises(ValueError):
        codec.encode([[1]], maxval=1000)


def test_encode_zero_and_negative_maxval():
    assert codec.encode([[0]], maxval=0) == b'P5\n1 1\n0\n\x00'
    with pytest.raises(PixelRangeError):
        codec.encode([[0]], maxval=-1)


@pytest.mark.parametrize('grid', [[], [[]], [[1, 2], [3]]])
def test_encode_rejects_bad_shapes(grid):
    with pytest.raises(InvalidArgumentError):
        codec.encode(grid)


def test_failed_write_keeps_partial_output():
    stream = io.BytesIO()
    with pytest.raises(PixelRangeError):
        codec.write([[1, 2], [3, 300]], stream)
    assert stream.getvalue() == b'P5\n2 2\n255\n\x01\x02'


def test_write_returns_size():
    stream = io.BytesIO()
    assert codec.write([[1, 2], [3, 4]], stream) == len(b'P5\n2 2\n255\n') + 4


def test_file_round_trip(tmp_path):
    path = tmp_path / 'image.pgm'
    written = []
    image = GrayImage.from_rows([[10, 20, 30], [40, 50, 60]])

    codec.write_file(image, path, on_written=lambda *args: written.append(args))

    assert path.read_bytes() == b'P5\n3 2\n255\n' + bytes([10, 20, 30, 40, 50, 60])
    assert written == [(str(path), 3, 2)]
    assert codec.read_file(path) == image


def test_read_file_error_carries_path(tmp_path):
    path = tmp_path / 'broken.pgm'
    path.write_bytes(b'P6\n1 1\n255\n\x00')

    with pytest.raises(FormatError) as error:
        codec.read_file(path)
    assert error.value.path == str(path)
    assert str(error.value).startswith(str(path))


def test_write_file_error_carries_path(tmp_path):
    path = tmp_path / 'partial.pgm'

    with pytest.raises(PixelRangeError) as error:
        codec.write_file([[1], [999]], path)
    assert error.value.path == str(path)
    assert path.read_bytes() == b'P5\n1 2\n255\n\x01'


def test_write_file_invalid_maxval_creates_nothing(tmp_path):
    path = tmp_path / 'never.pgm'
    with pytest.raises(InvalidArgumentError):
        codec.write_file([[1]], path, maxval=256)
    assert not path.exists()


def test_encode_non_integer_pixel():
    with pytest.raises(InvalidArgumentError):
        codec.encode([[1.5]])


@pytest.mark.parametrize('size', [b'200000 200000', b'100000000000 100000000000'])
def test_read_file_huge_declared_size_is_truncated(tmp_path, size):
    path = tmp_path / 'huge.pgm'
    path.write_bytes(b'P5\n' + size + b'\n255\n\x00')

    with pytest.raises(TruncatedInputError) as error:
        codec.read_file(path)
    assert error.value.received == 1
    assert error.value.path == str(path)


def test_read_raster_in_chunks(tmp_path):
    path = tmp_path / 'large.pgm'
    width, height = 300, 500
    path.write_bytes(b'P5\n300 500\n255\n' + bytes(i % 256 for i in range(width * height)))

    image = codec.read_file(path)
    assert width * height > codec.RASTER_CHUNK_SIZE
    assert image.pixels[499][299] == (width * height - 1) % 256
