"""Date formatting with Java-style date patterns.

Repository administrators configure metadata date formats with the pattern
letters they already know from the content engine (``yyyy-MM-dd``,
``dd MMM yyyy HH:mm``, ...). Patterns are compiled once so that an invalid
pattern is rejected when configuration loads rather than on first use.

Pattern rules:
- ASCII letters are pattern letters; a run of the same letter is one field.
- Text between single quotes is literal; ``''`` is an apostrophe.
- Every other character is copied as is.
"""

from datetime import date, datetime, time, timedelta
from typing import List, Tuple, Union

PATTERN_LETTERS = "GyYMLwWDdFEuaHkKhmsSzZX"

_MONTHS = [
    "January", "February", "March", "April", "May", "June", "July",
    "August", "September", "October", "November", "December",
]
_DAYS = [
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday",
    "Sunday",
]

# (letter, count) for fields, (None, text) for literals
Token = Tuple[Union[str, None], Union[int, str]]


def compile_pattern(pattern: str) -> List[Token]:
    """Split a date pattern into field and literal tokens.

    Args:
        pattern: Java-style date pattern.

    Returns:
        Tokens in pattern order.

    Raises:
        ValueError: If the pattern has an unterminated quote, uses an
            unknown pattern letter, or an ISO zone field is too long.
    """
    if pattern is None:
        raise ValueError("Pattern may not be null")

    tokens: List[Token] = []
    literal: List[str] = []
    i, n = 0, len(pattern)

    def flush() -> None:
        if literal:
            tokens.append((None, "".join(literal)))
            literal.clear()

    while i < n:
        c = pattern[i]
        if c == "'":
            if i + 1 < n and pattern[i + 1] == "'":
                literal.append("'")
                i += 2
                continue
            end = i + 1
            while True:
                end = pattern.find("'", end)
                if end == -1:
                    raise ValueError("Unterminated quote")
                if end + 1 < n and pattern[end + 1] == "'":
                    end += 2
                    continue
                break
            literal.append(pattern[i + 1:end].replace("''", "'"))
            i = end + 1
            continue
        if c.isascii() and c.isalpha():
            if c not in PATTERN_LETTERS:
                raise ValueError(f"Illegal pattern character '{c}'")
            count = 1
            while i + count < n and pattern[i + count] == c:
                count += 1
            if c == "X" and count > 3:
                raise ValueError(f"invalid ISO 8601 format: length={count}")
            flush()
            tokens.append((c, count))
            i += count
            continue
        literal.append(c)
        i += 1

    flush()
    return tokens


def _pad(value: int, count: int) -> str:
    return str(value).zfill(count)


def _offset(value: datetime) -> timedelta:
    if value.tzinfo is None:
        value = value.astimezone()
    return value.utcoffset() or timedelta(0)


def _format_offset(offset: timedelta, separator: str, minutes: bool) -> str:
    total = int(offset.total_seconds()) // 60
    sign = "-" if total < 0 else "+"
    hours, mins = divmod(abs(total), 60)
    text = f"{sign}{hours:02d}"
    if minutes:
        text += f"{separator}{mins:02d}"
    return text


def _week_of_month(value: datetime) -> int:
    first = value.replace(day=1)
    offset = (first.weekday() + 1) % 7
    return (value.day + offset - 1) // 7 + 1


def _week_date(value: datetime) -> Tuple[int, int]:
    """Return the week-based year and week of year.

    Weeks start on Sunday and week 1 is the week containing January 1, so
    the last days of December can fall in week 1 of the next year.
    """
    offset = (value.weekday() + 1) % 7
    if value.month == 12 and value.day + (6 - offset) > 31:
        return value.year + 1, 1
    jan1 = date(value.year, 1, 1)
    first_week = jan1 - timedelta(days=(jan1.weekday() + 1) % 7)
    week_start = value.date() - timedelta(days=offset)
    return value.year, (week_start - first_week).days // 7 + 1


def _format_field(letter: str, count: int, value: datetime) -> str:
    if letter == "G":
        return "AD"
    if letter in "yY":
        year = _week_date(value)[0] if letter == "Y" else value.year
        if count == 2:
            return _pad(year % 100, 2)
        return _pad(year, count)
    if letter in "ML":
        if count >= 4:
            return _MONTHS[value.month - 1]
        if count == 3:
            return _MONTHS[value.month - 1][:3]
        return _pad(value.month, count)
    if letter == "w":
        return _pad(_week_date(value)[1], count)
    if letter == "W":
        return _pad(_week_of_month(value), count)
    if letter == "D":
        return _pad(value.timetuple().tm_yday, count)
    if letter == "d":
        return _pad(value.day, count)
    if letter == "F":
        return _pad((value.day - 1) // 7 + 1, count)
    if letter == "E":
        name = _DAYS[value.weekday()]
        return name if count >= 4 else name[:3]
    if letter == "u":
        return _pad(value.isoweekday(), count)
    if letter == "a":
        return "AM" if value.hour < 12 else "PM"
    if letter == "H":
        return _pad(value.hour, count)
    if letter == "k":
        return _pad(value.hour or 24, count)
    if letter == "K":
        return _pad(value.hour % 12, count)
    if letter == "h":
        return _pad(value.hour % 12 or 12, count)
    if letter == "m":
        return _pad(value.minute, count)
    if letter == "s":
        return _pad(value.second, count)
    if letter == "S":
        return _pad(value.microsecond // 1000, count)
    if letter == "z":
        aware = value if value.tzinfo is not None else value.astimezone()
        return aware.tzname() or _format_offset(_offset(value), ":", True)
    if letter == "Z":
        return _format_offset(_offset(value), "", True)
    # X
    offset = _offset(value)
    if not offset:
        return "Z"
    return _format_offset(offset, ":" if count == 3 else "", count > 1)


class MetadataDateFormat:
    """Compiled date pattern.

    Instances are handed out one per thread by ``ConfigOptions``; callers
    should not share an instance across threads.
    """

    def __init__(self, pattern: str) -> None:
        """Compile a pattern.

        Args:
            pattern: Java-style date pattern.

        Raises:
            ValueError: If the pattern is invalid.
        """
        self._tokens = compile_pattern(pattern)
        self.pattern = pattern

    def format(self, value: Union[date, datetime]) -> str:
        """Format a date or datetime.

        Naive datetimes are treated as local time for zone fields.
        """
        if not isinstance(value, datetime):
            value = datetime.combine(value, time())
        parts = []
        for letter, item in self._tokens:
            if letter is None:
                parts.append(item)
            else:
                parts.append(_format_field(letter, item, value))
        return "".join(parts)

    def __repr__(self) -> str:
        return f"MetadataDateFormat({self.pattern!r})"
