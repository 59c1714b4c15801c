"""Annotated field types for the order wire format.

TimeOfDay:
    A duration-of-day rendered as "HH:mm:ss", or "D.HH:mm:ss" once it
    reaches a full day. Fractional seconds ("HH:mm:ss.fffffff") and a
    leading "-" are accepted and emitted.

Money:
    A decimal quantized to two fractional digits and emitted as a string
    ("5000.00") so trailing zeros survive JSON. Strings and numbers are both
    accepted on input; anything with more than 16 digits before the point
    is rejected.

Int32:
    An integer that fits a 32-bit column.
"""

import re
from datetime import timedelta
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation
from typing import Annotated, Any

from pydantic import BeforeValidator, Field, PlainSerializer, WithJsonSchema

TIMESPAN_REGEX = re.compile(
    r"^(?P<sign>-)?"
    r"(?:(?P<days>\d+)\.)?"
    r"(?P<hours>\d{1,2}):(?P<minutes>\d{1,2})"
    r"(?::(?P<seconds>\d{1,2})(?:\.(?P<fraction>\d{1,7}))?)?$"
)

CENTS = Decimal("0.01")
MONEY_LIMIT = Decimal(10) ** 16


def parse_timespan(value: Any) -> Any:
    """Parse "[-][d.]hh:mm[:ss[.fffffff]]" into a timedelta.

    A bare integer string is read as a number of days. Non-string values
    are passed through for pydantic's own timedelta handling.
    """
    if not isinstance(value, str):
        return value

    text = value.strip()
    if text.lstrip("-").isdigit():
        try:
            return timedelta(days=int(text))
        except OverflowError:
            raise ValueError("Time span out of range")

    match = TIMESPAN_REGEX.match(text)
    if not match:
        raise ValueError("Invalid time span format (use HH:mm:ss or D.HH:mm:ss)")

    hours = int(match["hours"])
    minutes = int(match["minutes"])
    seconds = int(match["seconds"] or 0)
    if hours > 23 or minutes > 59 or seconds > 59:
        raise ValueError("Time span component out of range")

    # .NET-style fractions carry up to 7 digits (100ns ticks); timedelta stops at microseconds.
    fraction = (match["fraction"] or "").ljust(7, "0")
    microseconds = int(fraction) // 10

    try:
        span = timedelta(
            days=int(match["days"] or 0),
            hours=hours,
            minutes=minutes,
            seconds=seconds,
            microseconds=microseconds,
        )
    except OverflowError:
        raise ValueError("Time span out of range")
    return -span if match["sign"] else span


def format_timespan(value: timedelta) -> str:
    """Render a timedelta as "[-][d.]hh:mm:ss[.fffffff]"."""
    sign = "-" if value < timedelta(0) else ""
    value = abs(value)

    hours, remainder = divmod(value.seconds, 3600)
    minutes, seconds = divmod(remainder, 60)

    text = f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    if value.days:
        text = f"{value.days}.{text}"
    if value.microseconds:
        text = f"{text}.{value.microseconds * 10:07d}"
    return sign + text


def quantize_money(value: Any) -> Any:
    if isinstance(value, bool):
        raise ValueError("Invalid decimal value")
    if not isinstance(value, (int, float, str, Decimal)):
        return value

    try:
        amount = Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_EVEN)
    except InvalidOperation:
        raise ValueError("Invalid decimal value")
    if not amount.is_finite():
        raise ValueError("Invalid decimal value")
    # Numeric(18, 2) leaves 16 digits before the point.
    if abs(amount) >= MONEY_LIMIT:
        raise ValueError("Amount out of range")
    return amount


def format_money(value: Decimal) -> str:
    return str(Decimal(value).quantize(CENTS, rounding=ROUND_HALF_EVEN))


TimeOfDay = Annotated[
    timedelta,
    BeforeValidator(parse_timespan),
    PlainSerializer(format_timespan, return_type=str, when_used="json"),
    WithJsonSchema({"type": "string", "examples": ["10:30:00", "1.02:30:00"]}),
]

Money = Annotated[
    Decimal,
    BeforeValidator(quantize_money),
    PlainSerializer(format_money, return_type=str, when_used="json"),
    WithJsonSchema({"type": "string", "examples": ["5000.00"]}),
]

# Integer columns are 32-bit.
Int32 = Annotated[int, Field(ge=-(2**31), le=2**31 - 1)]
