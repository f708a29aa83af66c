"""Shared constants used across the application."""

import re

# Changelist Matching Constants
# -----------------------------

MATCH_PREFIX_LENGTH = 25
"""Number of leading commit message characters searched for in `p4 changes` summaries."""

P4_CHANGES_LINE_PATTERN = re.compile(r"^Change (?P<number>\d+) on \S+ by (?P<user>[^@\s]+)@(?P<client>\S+)(?: \*\w+\*)? '(?P<summary>.*)'\s*$")
"""Pattern to match one line of `p4 changes` output."""

P4_SPEC_FIELD_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9]*:")
"""Pattern to match the start of a field in a `p4 change -o` form."""

P4_ZTAG_LINE_PATTERN = re.compile(r"^\.\.\. (?P<key>\S+) ?(?P<value>.*)$")
"""Pattern to match one field of `p4 -ztag` output."""

P4_UNKNOWN_CLIENT = "*unknown*"
"""Client name `p4 info` reports when no client workspace is set."""

NEW_CHANGELIST_PLACEHOLDER = "new"
"""Printed in place of a changelist number for commits without a changelist."""

# Configuration Constants
# -----------------------

GIT_P4_CLIENT_CONFIG_KEY = "git-p4.client"
"""Git configuration key holding the default Perforce client."""

GIT_P4_USER_CONFIG_KEY = "git-p4.user"
"""Git configuration key holding the default Perforce user."""

DEFAULT_UPSTREAM_BRANCH = "p4/master"
"""Upstream branch used when the checked-out branch has no tracking branch."""

# Squash Constants
# ----------------

SQUASHED_BRANCH_PREFIX = "squashed/"
"""Prefix of the branch a squashed commit is placed on by default."""
