class LinkShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:linkshortener_error'


class InvalidInputError(LinkShortenerError, ValueError):
    """Raised when a caller passes a malformed URL or a non-positive number."""

    error_code = 'input:invalid_input_error'


class ExhaustedRetriesError(LinkShortenerError):
    """Raised when no free shortcode was found within the retry limit."""

    error_code = 'app:exhausted_retries_error'


class ConfigurationError(LinkShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingConfigurationError(ConfigurationError):
    """Raised when the configuration file can't be found."""

    error_code = 'config:missing_configuration_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
