"""Account code validation and ordering.

Account codes mirror the chart-of-accounts hierarchy: one or more runs of
ASCII digits joined by dots, e.g. ``03.1.01.01.0001``. Only the structure is
checked; no particular numbering scheme is assumed.
"""

import re

from dremap.domain.errors import InvalidCodeError

_SEGMENT = re.compile(r"[0-9]+")


def validate_code(code: str) -> int:
    """Validate an account code and return its depth.

    Args:
        code: Account code (e.g., "03.1.01.01.0001")

    Returns:
        Number of dot-separated segments (>= 1)

    Raises:
        InvalidCodeError: If the code is empty or not a string, contains anything other than
            digits and dots, or has an empty segment
    """
    if code is None or code == "":
        raise InvalidCodeError("", "code is empty")
    if not isinstance(code, str):
        raise InvalidCodeError(str(code), "code must be a string")

    segments = code.split(".")
    for segment in segments:
        if segment == "":
            raise InvalidCodeError(code, "empty segment")
        if not _SEGMENT.fullmatch(segment):
            raise InvalidCodeError(code, "only digits and '.' are allowed")

    return len(segments)


def is_valid_code(code: str) -> bool:
    """Return True if ``code`` passes :func:`validate_code`."""
    try:
        validate_code(code)
    except InvalidCodeError:
        return False
    return True


def clean_code(code: str) -> str:
    """Strip surrounding whitespace and validate.

    Returns:
        The stripped code
    """
    cleaned = code.strip() if isinstance(code, str) else code
    validate_code(cleaned)
    return cleaned


def code_sort_key(code: str) -> tuple[tuple[int, ...], str]:
    """Sort key comparing codes segment by segment as integers.

    "3.2" sorts before "3.10", and a parent code sorts before its children.
    The raw string breaks ties between codes like "03" and "3".
    """
    return tuple(int(segment) for segment in code.split(".")), code
