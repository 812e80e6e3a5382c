"""Exceptions raised by the splitter."""


class SplitError(Exception):
    """Base class for splitter errors."""


class InvalidArgumentError(SplitError, ValueError):
    """A count, size or size string is out of range or malformed."""


class EmptyInputError(SplitError):
    """The input file has no header line."""


class HeaderTooLongError(SplitError):
    """No line terminator was found within the header length limit."""
