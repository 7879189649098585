"""Shell command execution helper."""

import logging
import subprocess

logger = logging.getLogger(__name__)


def run_shell_cmd(command):
    """Run a command and return (returncode, stdout, stderr).

    Blocks until the command exits; no timeout is applied.

    Args:
        command: list of command arguments

    Returns:
        (returncode, stdout, stderr) tuple
    """
    logger.debug(f"Running: {' '.join(command)}")
    try:
        result = subprocess.run(command, capture_output=True, text=True, encoding="utf-8")
    except UnicodeDecodeError as e:
        return 1, "", f"'{command[0]}' printed output that is not valid UTF-8: {e}"
    except FileNotFoundError:
        return 1, "", f"'{command[0]}' not found. Is it installed and on PATH?"
    except OSError as e:
        return 1, "", f"failed to run '{command[0]}': {e}"
    return result.returncode, result.stdout, result.stderr
