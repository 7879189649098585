"""Read and write the ssh_config file as a whole."""

import logging
import os
import stat
import tempfile

from iapssh.errors import FileReadError, FileWriteError

logger = logging.getLogger(__name__)

NEW_FILE_MODE = 0o644
SSH_DIR_MODE = 0o700


def read_config(path):
    """Return the file's text, or "" if it does not exist."""
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError:
        logger.debug(f"{path} does not exist yet, starting from an empty config")
        return ""
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(path, e) from e


def write_config(path, content):
    """Replace the file's content in one step.

    The body goes to a temporary file next to the target and is renamed over
    it, so on failure the previous file is left as it was. A new file gets
    mode 0644, an existing one keeps its mode. Symlinks are written through.
    """
    target = os.path.realpath(path)
    parent = os.path.dirname(target)

    try:
        mode = stat.S_IMODE(os.stat(target).st_mode)
    except FileNotFoundError:
        mode = NEW_FILE_MODE
    except OSError as e:
        raise FileWriteError(path, e) from e

    tmp_path = None
    try:
        if not os.path.isdir(parent):
            os.makedirs(parent, mode=SSH_DIR_MODE, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="utf-8", dir=parent, prefix=".config.", suffix=".tmp", delete=False
        ) as f:
            tmp_path = f.name
            f.write(content)
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, target)
        tmp_path = None
    except (OSError, UnicodeEncodeError) as e:
        raise FileWriteError(path, e) from e
    finally:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)
