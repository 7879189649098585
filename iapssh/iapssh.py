#!/usr/bin/env python3
"""SSH config provisioning for IAP-tunnelled GCP VMs — CLI entrypoint."""

import argparse

from iapssh.commands.setup import register_setup_command
from iapssh.logging_setup import setup_cli_logging


def main():
    parser = argparse.ArgumentParser(description="Set up SSH config entries for GCP VMs reached through IAP")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug output")
    parser.add_argument(
        "--defaults",
        default=None,
        help="YAML file with default project/zone/ssh_config (default: $IAPSSH_DEFAULTS or ~/.config/iapssh/config.yaml)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    register_setup_command(subparsers)

    args = parser.parse_args()
    setup_cli_logging(verbose=args.verbose)
    args.func(args)


if __name__ == "__main__":
    main()
