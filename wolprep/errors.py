"""Exceptions raised across wolprep."""


class WolprepError(Exception):
    """Base class for all wolprep errors."""


class InputError(WolprepError):
    """Raised when the JSON to process cannot be read."""


class TooltipError(WolprepError):
    """Raised when the tooltip surface does not open or close in time."""


class ReferenceLookupError(WolprepError):
    """Raised when the reference-lookup endpoint returns nothing usable."""


class CitationError(WolprepError):
    """Raised when a container's citations could not all be resolved.

    ``partial`` holds the CitationData built from the citations resolved
    before the failure.
    """

    def __init__(self, message, partial=None):
        super().__init__(message)
        self.partial = partial


class ConfigError(WolprepError):
    """Raised when a required setting, such as an API key, is missing."""
