"""
Standard exit codes for defevents commands.

Following Unix/POSIX conventions for command-line tools.
"""

# Standard POSIX exit codes
GENERAL_ERROR = 1        # General errors

# Application-specific exit codes (64-113 are typically available)
VCS_ERROR = 64           # A git command failed or returned unexpected output
TAGS_ERROR = 65          # The tag extraction tool failed
CONFIG_ERROR = 66        # Configuration file error
DATA_ERROR = 70          # Data format or validation error
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT)

# Exit code mappings for common exceptions
EXCEPTION_EXIT_CODES = {
    'FileNotFoundError': GENERAL_ERROR,
    'ValueError': DATA_ERROR,
    'KeyError': DATA_ERROR,
    'JSONDecodeError': DATA_ERROR,
    'KeyboardInterrupt': INTERRUPTED,
}


def get_exit_code_for_exception(exc: Exception) -> int:
    """
    Get the appropriate exit code for an exception.

    Args:
        exc: The exception that occurred

    Returns:
        Appropriate exit code
    """
    if isinstance(exc, CommandError):
        return exc.exit_code
    exc_name = exc.__class__.__name__
    return EXCEPTION_EXIT_CODES.get(exc_name, GENERAL_ERROR)


class CommandError(Exception):
    """
    Exception that commands can raise to indicate specific exit codes.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class VCSError(CommandError):
    """Raised when a git command fails or its output lacks a required field."""
    def __init__(self, message: str):
        super().__init__(message, VCS_ERROR)


class TagExtractionError(CommandError):
    """Raised when the ctags process fails."""
    def __init__(self, message: str):
        super().__init__(message, TAGS_ERROR)


class TagFormatError(CommandError):
    """Raised when tag extraction output cannot be parsed."""
    def __init__(self, message: str):
        super().__init__(message, DATA_ERROR)


class MetadataError(CommandError):
    """Raised when commit metadata does not have the expected shape."""
    def __init__(self, message: str):
        super().__init__(message, DATA_ERROR)


class ConfigError(CommandError):
    """Raised when there's a configuration error."""
    def __init__(self, message: str):
        super().__init__(message, CONFIG_ERROR)
