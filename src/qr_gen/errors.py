"""Exceptions raised for user-facing failures."""


class QrGenError(Exception):
    """Base class for errors reported to the user without a traceback."""


class InputError(QrGenError):
    pass


class EncodeError(QrGenError):
    pass


class OutputError(QrGenError):
    pass


class ImageFormatError(InputError):
    pass


class DecodeError(QrGenError):
    pass
