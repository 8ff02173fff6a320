"""Parsing of TEAM-123 style issue identifiers."""

import re

from linear_cli.core.exceptions import InvalidIdentifierError
from linear_cli.schemas.linear import IssueIdentifier

# ASCII only; used with fullmatch so a trailing newline is rejected
IDENTIFIER_RE = re.compile(r"([A-Z]+)-([0-9]+)")


def parse_identifier(value: str) -> IssueIdentifier:
    """
    Split ``TEAM-123`` into team key and sequence number.

    Raises:
        InvalidIdentifierError: value does not match ``^[A-Z]+-[0-9]+$``
    """
    match = IDENTIFIER_RE.fullmatch(value)
    if match is None:
        raise InvalidIdentifierError(value)
    return IssueIdentifier(team_key=match.group(1), number=int(match.group(2)))
