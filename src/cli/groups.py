"""Shared help-panel groups for the cljalign CLI."""

from __future__ import annotations

from cyclopts import Group, validators

session_group = Group(
    "Session",
    help="Session and run context options.",
    sort_key=0,
)

output_group = Group(
    "Output",
    help="Choose between writing files in place and checking them.",
    sort_key=1,
    validator=validators.MutuallyExclusive(),
)

alignment_group = Group(
    "Alignment",
    help="Control comment alignment and parallelism.",
    sort_key=2,
)

admin_group = Group(
    "Admin",
    help="Administrative commands and help.",
    sort_key=99,
)

__all__ = ["admin_group", "alignment_group", "output_group", "session_group"]
