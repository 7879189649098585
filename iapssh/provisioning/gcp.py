"""GCP provider: ask gcloud for the ssh invocation of an IAP-tunnelled VM."""

import logging

from iapssh.errors import NoOutputError, ProviderInvocationError
from iapssh.provisioning.shell import run_shell_cmd

logger = logging.getLogger(__name__)

# ── Command builders ───────────────────────────────────────────────


def _gcloud_ssh_dry_run_cmd(instance, zone, project, gcloud="gcloud"):
    """Build gcloud command that prints, without running, the ssh command for an instance."""
    return [
        gcloud,
        "compute",
        "ssh",
        instance,
        "--tunnel-through-iap",
        "--dry-run",
        "--zone",
        zone,
        "--project",
        project,
    ]


# ── Core logic ─────────────────────────────────────────────────────


def get_ssh_command(instance, zone, project, gcloud="gcloud"):
    """Return the ssh command line gcloud would use to reach the instance.

    Raises:
        ProviderInvocationError: gcloud is missing or exited non-zero.
        NoOutputError: gcloud succeeded but printed nothing.
    """
    cmd = _gcloud_ssh_dry_run_cmd(instance, zone, project, gcloud=gcloud)
    rc, stdout, stderr = run_shell_cmd(cmd)
    if stderr.strip():
        logger.debug(f"gcloud stderr: {stderr.strip()}")
    if rc != 0:
        detail = stderr.strip().splitlines()[-1] if stderr.strip() else f"exit status {rc}"
        raise ProviderInvocationError(detail)

    ssh_cmd = stdout.strip()
    if not ssh_cmd:
        raise NoOutputError()
    return ssh_cmd
