"""UK postcode format validation and normalisation."""

import re

from mashup.exceptions import PostcodeInvalid

_UK_POSTCODE_RE = re.compile(
    r"^[A-Z]{1,2}\d[A-Z\d]?\s?\d[A-Z]{2}$",
    re.IGNORECASE,
)


def is_valid_postcode(text) -> bool:
    """Return True if *text* is shaped like a UK postcode. Format only."""
    if not isinstance(text, str):
        return False
    return bool(_UK_POSTCODE_RE.match(text.strip()))


def normalise(text: str) -> str:
    """
    Normalise to the canonical 'AREA NNN' form, e.g. 'ec2a4ne' -> 'EC2A 4NE'.

    Raises PostcodeInvalid if the input is not a well-formed postcode.
    """
    if not is_valid_postcode(text):
        raise PostcodeInvalid(text)
    stripped = re.sub(r"\s+", "", text).upper()
    return f"{stripped[:-3]} {stripped[-3:]}"
