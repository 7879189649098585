"""Defaults file loading and resolution of the inputs for one run."""

import getpass
import logging
import os
from dataclasses import dataclass

import yaml

from iapssh.errors import ConfigError, IapSshError

logger = logging.getLogger(__name__)

DEFAULTS_ENV_VAR = "IAPSSH_DEFAULTS"
DEFAULT_DEFAULTS_PATH = "~/.config/iapssh/config.yaml"
DEFAULT_ALIAS_PREFIX = "compute."

_KNOWN_KEYS = ("project", "zone", "ssh_config", "gcloud", "alias_prefix")


@dataclass
class SetupParams:
    """Everything a single setup run needs, already validated."""

    project: str
    instance: str
    zone: str
    ssh_config: str
    force: bool = False
    dry_run: bool = False
    gcloud: str = "gcloud"
    alias_prefix: str = DEFAULT_ALIAS_PREFIX

    @property
    def alias(self) -> str:
        """Host alias written to the ssh config (e.g. compute.my-vm)."""
        return f"{self.alias_prefix}{self.instance}"


def user_home_dir() -> str:
    """$HOME if set, else the platform's notion of the home directory."""
    home = os.environ.get("HOME")
    if home:
        return home
    return os.path.expanduser("~")


def default_ssh_config_path() -> str:
    return os.path.join(user_home_dir(), ".ssh", "config")


def current_user() -> str:
    """Login name used for the fallback ``User`` line."""
    user = os.environ.get("USER")
    if user:
        return user
    try:
        return getpass.getuser()
    except (OSError, KeyError) as e:
        raise IapSshError(f"Cannot determine the current user ({e}); set $USER") from e


def _expand_path(path: str) -> str:
    """Expand user home directory and environment variables in path."""
    return os.path.expanduser(os.path.expandvars(path))


def defaults_path(explicit=None) -> str:
    return _expand_path(explicit or os.environ.get(DEFAULTS_ENV_VAR) or DEFAULT_DEFAULTS_PATH)


def load_defaults(path) -> dict:
    """Load the YAML defaults file. A missing file means no defaults."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        return {}
    except yaml.YAMLError as e:
        raise ConfigError(path, f"cannot parse YAML: {e}") from e
    except OSError as e:
        raise ConfigError(path, str(e)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(path, "expected a mapping at the top level")

    defaults = {}
    for key, value in data.items():
        if key not in _KNOWN_KEYS:
            logger.warning(f"Ignoring unknown key '{key}' in {path}")
            continue
        if value is None:
            continue
        defaults[key] = str(value)
    return defaults


def resolve_setup_params(args, defaults) -> SetupParams:
    """Combine CLI args with file defaults; CLI values win.

    Missing project, instance or zone is left as None for the caller to
    report as a usage error.
    """

    def pick(name):
        value = getattr(args, name, None)
        return value if value else defaults.get(name)

    ssh_config = pick("ssh_config") or default_ssh_config_path()
    return SetupParams(
        project=pick("project"),
        instance=args.instance,
        zone=pick("zone"),
        ssh_config=_expand_path(ssh_config),
        force=args.force,
        dry_run=args.dry_run,
        gcloud=defaults.get("gcloud", "gcloud"),
        alias_prefix=defaults.get("alias_prefix", DEFAULT_ALIAS_PREFIX),
    )
