class InvalidArgumentError(ValueError):
    """Raised when the resume text is missing, not a string, or blank after trimming."""


class ConfigurationError(ValueError):
    """Raised when a parser configuration file cannot be read or fails validation."""
