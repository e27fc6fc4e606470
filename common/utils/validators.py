from datetime import date
import logging

logger = logging.getLogger(__name__)

WEEKDAY_ABBREVIATIONS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def parse_iso_date(value):
    """
    Parse the calendar date at the start of an ISO date or datetime string.

    Args:
    value (str): A string such as "2025-06-01" or "2025-06-01T09:00:00Z".

    Returns:
    date: The parsed date, or None if the value is missing or malformed.
    """
    if not isinstance(value, str):
        return None

    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        logger.debug(f"Unparseable date: {value!r}")
        return None

def weekday_abbreviation(value):
    """
    Three-letter day of week (Sun..Sat) for an ISO date string.

    Returns None when the date cannot be parsed.
    """
    parsed = parse_iso_date(value)
    if parsed is None:
        return None
    # isoweekday(): Monday=1 .. Sunday=7
    return WEEKDAY_ABBREVIATIONS[parsed.isoweekday() % 7]

def string_list(value):
    """Keep the string entries of a list-like field, dropping anything else."""
    if not isinstance(value, (list, tuple, set, frozenset)):
        if value is not None:
            logger.warning(f"Expected a list, got {type(value)}")
        return []
    return [v for v in value if isinstance(v, str)]

def sanitize_string(input_string, max_length=None):
    """
    Sanitize a string by trimming whitespace and optionally truncating.

    Args:
    input_string (str): The string to sanitize.
    max_length (int, optional): The maximum length of the string. If provided,
                                the string will be truncated to this length.

    Returns:
    str: The sanitized string.
    """
    if not isinstance(input_string, str):
        if input_string is not None:
            logger.warning(f"Invalid input type for sanitization: {type(input_string)}")
        return ""

    sanitized = input_string.strip()

    if max_length is not None and len(sanitized) > max_length:
        sanitized = sanitized[:max_length]
        logger.info(f"String truncated to {max_length} characters")

    return sanitized
