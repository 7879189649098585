"""Provider side: running gcloud and capturing its ssh invocation."""

from iapssh.provisioning.gcp import get_ssh_command
from iapssh.provisioning.shell import run_shell_cmd

__all__ = [
    "get_ssh_command",
    "run_shell_cmd",
]
