"""Extract ssh_config options from a generated ssh command line.

The input is the single line printed by ``gcloud compute ssh --dry-run``, e.g.::

    /usr/bin/ssh -t -i /home/u/.ssh/google_compute_engine -o CheckHostIP=no
        -o ProxyCommand='python3 gcloud.py compute start-iap-tunnel vm %p ...'
        -o StrictHostKeyChecking=no u@compute.1234

Only the ``-i`` flag and ``-o Key=Value`` options are extracted. Splitting is
done on the literal `` -o `` separator, so a value that itself contains
`` -o `` is split apart, and a quoted value with spaces in the last ``-o``
option is cut at its first space.
"""

import re
from collections.abc import Mapping

from iapssh.errors import NoOutputError

IDENTITY_FILE_KEY = "IdentityFile"
OPTION_SEPARATOR = " -o "

_QUOTES = "\"'"
_IDENTITY_FLAG = re.compile(r"(?:^|\s)-i\s+(\S+)")
_WHITESPACE = re.compile(r"\s")


class ConnectionOptions(Mapping):
    """Read-only mapping of ssh option name to value.

    Keys keep the case gcloud emitted them in. Iteration follows the order
    in which keys were first seen on the command line.
    """

    def __init__(self, options=None):
        self._options = dict(options or {})

    @property
    def identity_file(self) -> str | None:
        return self._options.get(IDENTITY_FILE_KEY)

    def __getitem__(self, key):
        return self._options[key]

    def __iter__(self):
        return iter(self._options)

    def __len__(self):
        return len(self._options)

    def __repr__(self):
        return f"ConnectionOptions({self._options!r})"


def _strip_quotes(text: str) -> str:
    """Remove one leading and one trailing quote character, if present."""
    if text[:1] and text[0] in _QUOTES:
        text = text[1:]
    if text[-1:] and text[-1] in _QUOTES:
        text = text[:-1]
    return text


def _find_identity_file(ssh_cmd: str) -> str | None:
    match = _IDENTITY_FLAG.search(ssh_cmd)
    if match is None:
        return None
    return _strip_quotes(match.group(1))


def _parse_option(segment: str) -> tuple[str, str] | None:
    """Parse one ``Key=Value`` segment; None if it holds no usable option."""
    key, sep, value = segment.partition("=")
    if not sep:
        return None
    key = key.strip().strip('"')
    if not key:
        return None
    return key, _strip_quotes(value)


def extract_options(raw_command_line: str) -> ConnectionOptions:
    """Parse the ssh command line printed by the provider.

    Returns:
        ConnectionOptions holding every ``-o`` option plus ``IdentityFile``
        when an ``-i <path>`` flag is present. Later duplicates win.

    Raises:
        NoOutputError: the command line is empty.
    """
    ssh_cmd = raw_command_line.strip()
    if not ssh_cmd:
        raise NoOutputError()

    options = {}
    identity_file = _find_identity_file(ssh_cmd)
    if identity_file is not None:
        options[IDENTITY_FILE_KEY] = identity_file

    # First part is the ssh binary and its leading flags
    parts = ssh_cmd.split(OPTION_SEPARATOR)[1:]
    for i, part in enumerate(parts):
        # The last option may be followed by the user@host target
        if i == len(parts) - 1:
            part = _WHITESPACE.split(part.lstrip(), maxsplit=1)[0]
        parsed = _parse_option(part)
        if parsed is not None:
            key, value = parsed
            options[key] = value

    return ConnectionOptions(options)
