class HowsitError(Exception):
    """Base class for errors raised by howsit."""


class TransportError(HowsitError):
    """The stats source could not be reached or read. Fatal for the app."""


class ParseError(HowsitError):
    """A protocol line is structurally malformed."""


class ValidationError(HowsitError):
    """A protocol line names a slab id that cannot be stored."""


class ConfigError(HowsitError):
    """A configuration value from the environment is unusable."""
