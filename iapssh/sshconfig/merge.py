"""Merge a generated Host block into the text of an ssh_config file.

The file is treated as a sequence of sections separated by blank lines.
Sections other than the target alias are copied through untouched.
"""

from dataclasses import dataclass
from enum import Enum

from iapssh.errors import ConflictError

SECTION_SEPARATOR = "\n\n"
INDENT = "  "


class MergeDecision(Enum):
    INSERT = "insert"
    REJECT = "reject"
    REPLACE = "replace"


@dataclass(frozen=True)
class MergeResult:
    """Outcome of a merge.

    ``preview`` is set for dry runs; otherwise ``final_content`` holds the
    full new file body. ``decision`` is None for previews, since a dry run
    never looks at the existing file.
    """

    preview: str | None = None
    final_content: str | None = None
    was_update: bool = False
    decision: MergeDecision | None = None

    @property
    def is_preview(self) -> bool:
        return self.preview is not None


def render_host_block(alias, options, current_user):
    """Render the Host block for alias, without a trailing newline.

    The alias is used for both ``Host`` and ``HostName``. A ``User`` line
    with current_user is added when options carry no ``User``.
    """
    lines = [f"Host {alias}", f"{INDENT}HostName {alias}"]
    for key, value in options.items():
        lines.append(f"{INDENT}{key} {value}")
    if "User" not in options:
        lines.append(f"{INDENT}User {current_user}")
    return "\n".join(lines)


def split_sections(content):
    """Split file content on blank lines. Empty content yields ``[""]``."""
    return content.split(SECTION_SEPARATOR)


def is_host_section(section, alias):
    """True if the section's first line is ``Host <alias>``.

    The alias is compared as a whole token, so ``compute.vm1`` does not
    match a ``Host compute.vm10`` section.
    """
    stripped = section.strip()
    if not stripped.startswith(f"Host {alias}"):
        return False
    tokens = stripped.split("\n", 1)[0].split()
    return len(tokens) >= 2 and tokens[1] == alias


def find_host_section(sections, alias):
    """Return the index of the first section for alias, or None."""
    for idx, section in enumerate(sections):
        if is_host_section(section, alias):
            return idx
    return None


def decide(entry_exists, force_update):
    if not entry_exists:
        return MergeDecision.INSERT
    return MergeDecision.REPLACE if force_update else MergeDecision.REJECT


def _append_separator(content):
    """Separator that leaves exactly one blank line after content.

    Newlines content already ends with count towards the separator. Empty
    content is a single empty section and still gets the full separator.
    """
    if not content:
        return SECTION_SEPARATOR
    trailing = len(content) - len(content.rstrip("\n"))
    return "\n" * max(0, len(SECTION_SEPARATOR) - trailing)


def merge_config(existing_content, alias, options, current_user, force_update=False, dry_run=False):
    """Merge the Host block for alias into existing_content.

    Without force_update existing_content is kept byte-for-byte, empty
    sections included, and the new block is appended after one blank line.
    With force_update any section for alias is dropped along with blank
    sections, trailing newlines of the kept sections are trimmed, and the
    new block is appended. Running a forced merge twice gives the same text.

    Returns:
        MergeResult with ``preview`` for dry runs, else ``final_content``.

    Raises:
        ConflictError: a section for alias exists and force_update is False.
    """
    config_content = render_host_block(alias, options, current_user)

    if dry_run:
        return MergeResult(preview=config_content)

    sections = split_sections(existing_content)
    entry_exists = find_host_section(sections, alias) is not None
    decision = decide(entry_exists, force_update)

    if decision is MergeDecision.REJECT:
        raise ConflictError(alias)

    if force_update:
        kept = [s.rstrip("\n") for s in sections if not is_host_section(s, alias) and s.strip() != ""]
        final_content = SECTION_SEPARATOR.join(kept + [config_content]) + "\n"
    else:
        body = SECTION_SEPARATOR.join(sections)
        final_content = body + _append_separator(body) + config_content + "\n"

    return MergeResult(final_content=final_content, was_update=entry_exists, decision=decision)
