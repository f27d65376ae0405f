from typing import Optional


class PgmError(Exception):
    """
    Base class of all codec failures. The optional `path` is filled in by the file-based entry points
    and only affects how the error is printed.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self):
        if self.path is None:
            return self.message
        return f'{self.path}: {self.message}'


class DecodeError(PgmError):
    pass


class EncodeError(PgmError):
    pass


class FormatError(DecodeError):
    """ Bad magic or an unparsable header field """


class TruncatedInputError(DecodeError):
    def __init__(self, expected: int, received: int, path: Optional[str] = None):
        super().__init__(f'Reached end of input after {received} of {expected} pixels', path)
        self.expected = expected
        self.received = received


class PixelRangeError(DecodeError, EncodeError):
    def __init__(self, value: int, maxval: int, row: int, column: int, path: Optional[str] = None):
        super().__init__(f'Pixel value {value} at ({row}, {column}) outside of range [0, {maxval}]', path)
        self.value = value
        self.maxval = maxval
        self.row = row
        self.column = column


class InvalidArgumentError(EncodeError, ValueError):
    pass
