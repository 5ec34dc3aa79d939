"""
Custom exceptions for SimpleGraticule package.

This module defines exception classes for the graticule overlay, covering
configuration validation, interval selection and the overlay lifecycle.
"""


class GraticuleError(Exception):
    """Base exception class for all SimpleGraticule errors."""
    pass


class InvalidParameterError(GraticuleError):
    """
    Raised for invalid user inputs.

    This exception is used for configuration validation failures such as
    unknown option names, out-of-range padding ratios, or an event name the
    host does not know how to bind.
    """
    pass


class InvalidIntervalError(GraticuleError):
    """
    Raised when a grid interval or reference span cannot produce a grid.

    Zero, negative or non-finite spacings would never advance the line
    generator, so they are rejected before any line is built. Also raised
    when the requested spacing would emit more lines per axis than the
    generator allows.
    """
    pass


class NotAttachedError(GraticuleError):
    """Raised when a redraw is requested on an overlay without a host."""
    pass


class RenderError(GraticuleError):
    """
    Raised when a standalone graticule preview cannot be rendered or saved.

    This wraps Matplotlib and file system errors raised while drawing or
    writing the preview image.
    """
    pass
