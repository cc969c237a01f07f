"""
Shared utility functions for defevents.
"""
import subprocess

from .config import logger


def run_command(command, cwd=".", capture_output=False, check=True, log_stderr=True, timeout=None):
    """
    Runs a command and logs the output.

    Args:
        command (list): The command and its arguments, run without a shell.
        cwd (str): The working directory.
        capture_output (bool): If True, return (stdout, returncode), otherwise return (None, returncode).
        check (bool): If True, raise CalledProcessError on non-zero exit codes.
        log_stderr (bool): If False, do not log stderr as an error.
        timeout (float): Seconds before the command is killed, None for no limit.

    Returns:
        tuple: (stdout_str, returncode) if capture_output is True, otherwise (None, returncode).
    """
    cmd_str = ' '.join(command)

    try:
        logger.debug(f"Running command in '{cwd}': {cmd_str}")
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            cwd=cwd,
            check=False,  # Disable check here to handle output manually
            encoding='utf-8',
            errors='replace',
            timeout=timeout,
        )

        # Log stderr only if the command failed
        if result.returncode != 0:
            if log_stderr and result.stderr and result.stderr.strip():
                logger.error(result.stderr.strip())
            # If check is True, re-raise the exception
            if check:
                raise subprocess.CalledProcessError(
                    result.returncode, command, output=result.stdout, stderr=result.stderr
                )

        return (result.stdout if capture_output else None, result.returncode)
    except subprocess.CalledProcessError as e:
        if log_stderr:
            logger.error(f"Command failed with exit code {e.returncode}: {cmd_str}")
        if check:
            raise
        return (None, e.returncode)
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.error(f"An unexpected error occurred while running command '{cmd_str}': {e}")
        if check:
            raise
        return (None, -1)
