"""Setup command: write an ssh_config Host entry for an IAP-tunnelled GCP VM."""

import logging
import sys

from iapssh.config import current_user, defaults_path, load_defaults, resolve_setup_params
from iapssh.errors import IapSshError
from iapssh.provisioning.gcp import get_ssh_command
from iapssh.sshconfig.merge import merge_config
from iapssh.sshconfig.options import extract_options
from iapssh.sshconfig.store import read_config, write_config

logger = logging.getLogger(__name__)

_REQUIRED = (
    ("project", "-p, --project <your-project-id>"),
    ("instance", "-i, --instance <your-instance-name>"),
    ("zone", "-z, --zone <your-zone>"),
)


# ── Core logic ─────────────────────────────────────────────────────


def run_setup(params, user=None):
    """Fetch the ssh invocation from gcloud and merge it into the ssh config.

    Steps:
        1. Run gcloud compute ssh --tunnel-through-iap --dry-run
        2. Extract the -i / -o options from its output
        3. Merge a Host block for the alias (preview only in dry-run mode)
        4. Write the new config file unless dry-run

    Returns:
        The MergeResult.

    Raises:
        IapSshError: on any provider, conflict or file failure. The config
        file is left unchanged in every error case.
    """
    ssh_cmd = get_ssh_command(params.instance, params.zone, params.project, gcloud=params.gcloud)
    options = extract_options(ssh_cmd)
    logger.debug(f"Extracted options: {', '.join(options)}")

    existing = "" if params.dry_run else read_config(params.ssh_config)
    result = merge_config(
        existing,
        params.alias,
        options,
        user if user is not None else current_user(),
        force_update=params.force,
        dry_run=params.dry_run,
    )

    if result.is_preview:
        logger.info(f"The following configuration would be added to {params.ssh_config}:\n")
        logger.info(result.preview)
        logger.info(f"\nTo add this configuration manually, append the above content to {params.ssh_config}")
        return result

    write_config(params.ssh_config, result.final_content)
    if result.was_update:
        logger.info(f"SSH config updated successfully for instance: {params.alias}")
    else:
        logger.info(f"SSH config added successfully for instance: {params.alias}")
    return result


# ── CLI handler ────────────────────────────────────────────────────


def handle_setup(args):
    """CLI handler for 'setup'."""
    try:
        defaults = load_defaults(defaults_path(args.defaults))
    except IapSshError as e:
        logger.error(f"Error: {e}")
        sys.exit(1)

    params = resolve_setup_params(args, defaults)
    missing = [flag for name, flag in _REQUIRED if not getattr(params, name)]
    if missing:
        args.usage_error("Please provide all required arguments:\n" + "\n".join(missing))

    try:
        run_setup(params)
    except IapSshError as e:
        logger.error(f"Error: {e}")
        sys.exit(1)


# ── Registration ───────────────────────────────────────────────────


def register_setup_command(subparsers):
    """Register the 'setup' command."""
    parser = subparsers.add_parser("setup", help="Add or update the SSH config entry for a GCP VM")
    parser.add_argument("-p", "--project", default=None, help="GCP project ID")
    parser.add_argument("-i", "--instance", default=None, help="GCP instance name")
    parser.add_argument("-z", "--zone", default=None, help="GCP zone (e.g. us-central1-a)")
    parser.add_argument("-f", "--force", action="store_true", help="Force update existing entry")
    parser.add_argument("--dry-run", action="store_true", help="Print the config without modifying the SSH config file")
    parser.add_argument("--config", dest="ssh_config", default=None, help="Path to SSH config file (default: ~/.ssh/config)")
    parser.set_defaults(func=handle_setup, usage_error=parser.error)
