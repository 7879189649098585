"""ssh_config handling: option extraction, block merging, file storage."""

from iapssh.sshconfig.merge import (
    MergeDecision,
    MergeResult,
    find_host_section,
    merge_config,
    render_host_block,
    split_sections,
)
from iapssh.sshconfig.options import IDENTITY_FILE_KEY, ConnectionOptions, extract_options
from iapssh.sshconfig.store import read_config, write_config

__all__ = [
    "ConnectionOptions",
    "IDENTITY_FILE_KEY",
    "MergeDecision",
    "MergeResult",
    "extract_options",
    "find_host_section",
    "merge_config",
    "read_config",
    "render_host_block",
    "split_sections",
    "write_config",
]
