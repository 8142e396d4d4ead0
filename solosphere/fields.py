"""Parsing and formatting of the loosely typed values the client posts.

The browser form sends prices as strings and dates as ISO-8601 strings (with a
trailing ``Z`` from ``Date.toJSON``) or as bare ``YYYY-MM-DD`` values. Datetimes
are stored naive, in UTC.
"""

import math
from datetime import datetime, timezone


def utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_datetime(value):
    """Parse an ISO-8601 string into a naive UTC datetime.

    Raises ValueError for empty or unparsable input.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        if not isinstance(value, str) or not value.strip():
            raise ValueError('A date is required')
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        parsed = datetime.fromisoformat(text)

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def format_datetime(value):
    if value is None:
        return None
    return value.replace(tzinfo=timezone.utc).isoformat().replace('+00:00', 'Z')


def parse_number(value):
    # bool is an int subclass; a checkbox value is never a price
    if isinstance(value, bool) or value is None:
        raise ValueError('A number is required')
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise ValueError('A number is required')
    try:
        number = float(value)
    except TypeError:
        raise ValueError(f'Not a number: {value!r}')
    if not math.isfinite(number):
        raise ValueError(f'Not a finite number: {value!r}')
    return number


def parse_text(value, field, optional=False):
    """Return ``value`` if it is a string (or None when ``optional``); raise ValueError otherwise."""
    if value is None and optional:
        return None
    if not isinstance(value, str):
        raise ValueError(f'{field} must be a string')
    return value
