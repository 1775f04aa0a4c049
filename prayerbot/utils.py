import re

TIME_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def parse_hhmm(value) -> str | None:
    """Return the leading "HH:MM" of an API time value, or None.

    Some APIs append the offset, e.g. "05:10 (+06)".
    """
    if not isinstance(value, str) or not value.strip():
        return None
    token = value.strip().split()[0]
    if len(token) == 4 and token[1] == ":":
        token = "0" + token
    if not TIME_RE.match(token):
        return None
    return token


def to_12_hour(time24: str | None) -> str:
    if not time24:
        return "N/A"
    hours, minutes = (int(part) for part in time24.split(":")[:2])
    period = "PM" if hours >= 12 else "AM"
    hours12 = hours % 12 or 12
    return f"{hours12:02d}:{minutes:02d} {period}"
