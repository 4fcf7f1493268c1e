class ShortieError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:shortie_error'


class ConfigurationError(ShortieError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'


class ShortcodeCollisionError(ShortieError):
    """Raised when no identifier length is left to resolve a collision between URLs."""

    error_code = 'app:shortcode_collision_error'
