"""Exceptions raised while configuring, rendering and writing an image."""


class MandelbrotError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(MandelbrotError, ValueError):
    """Invalid render parameters, detected before any worker starts."""


class FatalRenderFault(MandelbrotError, RuntimeError):
    """A render aborted because a buffer could not be allocated or a worker failed."""


class EncodingError(MandelbrotError, OSError):
    """The rendered buffer could not be written to its destination."""
