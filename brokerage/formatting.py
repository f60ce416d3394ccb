"""
Formatting and parsing helpers for form inputs and display values.

format_* functions shape what the user sees as they type; parse_* functions
turn that text back into values for storage and calculation. None of these
raise on string input: anything unparseable degrades to a fallback or is
returned unchanged.

The as-you-type formatters (format_number_with_commas, format_price_input,
format_lease_rate_input, format_phone_input) define the field formats API
clients echo back; the admin and calculator endpoints parse with their
parse_* counterparts.
"""

import math
import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

NON_DIGITS = re.compile(r"[^0-9]")
NON_NUMERIC = re.compile(r"[^0-9.]")
LEADING_NUMBER = re.compile(r"\d+(?:\.\d*)?|\.\d+")

YOUTUBE_WATCH = re.compile(
    r"(?:youtube\.com/watch\?v=|youtube\.com/embed/)([a-zA-Z0-9_-]{11})"
)
YOUTUBE_SHORT = re.compile(r"youtu\.be/([a-zA-Z0-9_-]{11})")


def digits_only(value: str) -> str:
    return NON_DIGITS.sub("", value)


def format_number_with_commas(value: str) -> str:
    """Format number with commas: "1500000" -> "1,500,000"."""
    digits = digits_only(value)
    if digits == "":
        return ""
    return f"{int(digits):,}"


def parse_formatted_number(value: str) -> int:
    """Parse formatted number: "1,500,000" -> 1500000. Empty -> 0."""
    digits = digits_only(value)
    if digits == "":
        return 0
    return int(digits)


def format_price_input(value: str) -> str:
    """Prices are typed as whole dollars with grouping commas."""
    return format_number_with_commas(value)


def format_lease_rate_input(value: str) -> str:
    """
    Format a $/SF lease rate as the user types: "10.505" -> "10.50".

    Keeps a single decimal point and at most two fractional digits.
    Extra digits are truncated, never rounded.
    """
    cleaned = NON_NUMERIC.sub("", value)
    whole, dot, fraction = cleaned.partition(".")
    if not dot:
        return whole
    return whole + "." + fraction.replace(".", "")[:2]


def format_phone_input(value: str) -> str:
    """Format phone as (614) 555-1234 as you type."""
    digits = digits_only(value)[:10]
    if len(digits) <= 3:
        return "" if digits == "" else f"({digits}"
    if len(digits) <= 6:
        return f"({digits[:3]}) {digits[3:]}"
    return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"


def parse_formatted_phone(value: str) -> str:
    """Parse formatted phone to digits: "(614) 555-1234" -> "6145551234"."""
    return digits_only(value)[-10:]


def format_phone(phone: Optional[str]) -> str:
    """
    Format a stored phone number as (XXX) XXX-XXXX for display.

    Accepts dashes, dots, spaces and a leading US country code. Numbers
    with any other digit count come back exactly as stored.
    """
    if not phone or not isinstance(phone, str):
        return ""
    digits = digits_only(phone)
    if len(digits) == 11 and digits.startswith("1"):
        digits = digits[1:]
    elif len(digits) != 10:
        return phone
    return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"


def phone_tel_link(phone: str) -> str:
    """tel: href for a stored phone number, always dialled as +1."""
    return f"tel:+1{digits_only(phone)[-10:]}"


def youtube_embed_url(url: Optional[str]) -> Optional[str]:
    """Convert a watch, embed or youtu.be link into an embeddable URL."""
    if not url or not url.strip():
        return None
    u = url.strip()
    match = YOUTUBE_WATCH.search(u) or YOUTUBE_SHORT.search(u)
    if match:
        return f"https://www.youtube.com/embed/{match.group(1)}"
    return None


def parse_num(raw: str, minimum: float, maximum: float, fallback: float) -> float:
    """
    Parse a calculator text field.

    Strips everything except digits and the decimal point, reads the leading
    number and clamps it to [minimum, maximum]. Returns fallback when the
    field holds no number at all.
    """
    match = LEADING_NUMBER.match(NON_NUMERIC.sub("", raw or ""))
    if not match:
        return fallback
    n = float(match.group())
    return max(minimum, min(maximum, n))


def stringify_num(n: float) -> str:
    """Whole-dollar display with grouping commas: 1500000.4 -> "1,500,000"."""
    if math.isinf(n):
        return ""
    rounded = Decimal(str(n)).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return f"{rounded:,}"


def slugify(text: str) -> str:
    """URL slug: "225 Worth Ave." -> "225-worth-ave"."""
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
