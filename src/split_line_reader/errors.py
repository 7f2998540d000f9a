"""Exceptions raised by split readers and codecs."""


class SplitReaderError(Exception):
    """Base class for all split reader errors."""


class UnsupportedFormatError(SplitReaderError, ValueError):
    """No codec is registered for the file's naming convention."""


class SplitAlignmentError(SplitReaderError, ValueError):
    """A split boundary does not fall on a position the codec can seek to."""


class CorruptStreamError(SplitReaderError, OSError):
    """Container data is malformed or fails its checksum."""


class ReaderClosedError(SplitReaderError, ValueError):
    """A read was attempted on a closed reader."""
