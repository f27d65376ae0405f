from typing import BinaryIO

COMMENT = b'#'
LINE_ENDINGS = (b'\n', b'\r')
# ASCII whitespace plus the file, group, record and unit separators
WHITESPACE = b' \t\n\x0b\x0c\r\x1c\x1d\x1e\x1f'


def _skip_comment(stream: BinaryIO):
    while True:
        byte = stream.read(1)
        if not byte or byte in LINE_ENDINGS:
            return


def next_token(stream: BinaryIO) -> str:
    """
    Reads the next whitespace-delimited header token, ignoring '#' comments.

    The whitespace byte ending the token is consumed, so after the last header field the stream is positioned
    at the first raster byte. Returns an empty string if the stream ends before any token byte.
    """
    token = bytearray()
    while True:
        byte = stream.read(1)
        if not byte:
            break

        if byte == COMMENT:
            _skip_comment(stream)
        elif byte not in WHITESPACE:
            token += byte
        elif token:
            break

    return token.decode('latin-1')
