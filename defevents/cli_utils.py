"""
Common CLI utilities and decorators for consistent command behavior.
"""

import sys
import click
from functools import wraps
from .config import logger
from .exit_codes import INTERRUPTED, get_exit_code_for_exception, CommandError
from .output import emit_error


def handle_errors(func):
    """
    Decorator that maps failures to exit codes.

    Errors are reported as a JSON object on stderr so stdout only ever
    carries complete output.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            emit_error("Interrupted by user", type="interrupted")
            sys.exit(INTERRUPTED)
        except click.ClickException:
            # Click exceptions already have their exit code
            raise
        except CommandError as e:
            emit_error(str(e), type=type(e).__name__, context={"exit_code": e.exit_code})
            sys.exit(e.exit_code)
        except Exception as e:
            logger.debug("Command failed", exc_info=True)
            emit_error(f"Command failed: {e}", type=type(e).__name__)
            sys.exit(get_exit_code_for_exception(e))

    return wrapper
