"""General text utility functions."""

import re
from functools import lru_cache

_IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

__all__ = (
    "is_valid_identifier",
    "pascalize",
)


@lru_cache(maxsize=256)
def pascalize(string: str, separator: str = "_") -> str:
    """Convert a separated name to PascalCase.

    Only the first character of each segment is upper-cased; the rest of the
    segment is kept as is, so ``"user_HTTPLog"`` becomes ``"UserHTTPLog"``.

    Args:
        string: The string to convert.
        separator: Segment separator.

    Returns:
        str: The converted string.
    """
    return "".join(segment[:1].upper() + segment[1:] for segment in string.split(separator))


def is_valid_identifier(name: str) -> bool:
    """Check that a name is a plain, unquoted PostgreSQL identifier.

    Letters, digits and underscores; must not start with a digit.
    """
    return bool(_IDENTIFIER_RE.match(name))
