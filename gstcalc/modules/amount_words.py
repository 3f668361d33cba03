from decimal import Decimal
from numbers import Integral

from gstcalc.modules.errors import InvalidArgumentError

ONES = [
    "Zero", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine",
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen", "Sixteen",
    "Seventeen", "Eighteen", "Nineteen",
]
TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]

# Indian grouping: crore = 10^7, lakh = 10^5, thousand = 10^3
SCALES = [("Crore", 10_000_000), ("Lakh", 100_000), ("Thousand", 1_000)]


def _check_amount(amount) -> int:
    if isinstance(amount, bool):
        raise InvalidArgumentError(f"Amount must be a whole number of rupees, got {amount!r}")
    if isinstance(amount, Integral):
        value = int(amount)
    elif isinstance(amount, (float, Decimal)):
        try:
            integral = amount == int(amount)
        except (ValueError, OverflowError, ArithmeticError):
            integral = False
        if not integral:
            raise InvalidArgumentError(
                f"Amount must be rounded to whole rupees before conversion, got {amount!r}"
            )
        value = int(amount)
    else:
        raise InvalidArgumentError(f"Amount must be numeric, got {type(amount).__name__}")

    if value < 0:
        raise InvalidArgumentError(f"Amount must be non-negative, got {value}")
    return value


def _two_digits(n: int) -> str:
    if n < 20:
        return ONES[n]
    tens, ones = divmod(n, 10)
    return TENS[tens] + (f" {ONES[ones]}" if ones else "")


def _three_digits(n: int) -> str:
    hundreds, rest = divmod(n, 100)
    parts = []
    if hundreds:
        parts.append(f"{ONES[hundreds]} Hundred")
    if rest:
        parts.append(_two_digits(rest))
    return " ".join(parts)


def amount_in_words(amount) -> str:
    """
    Spells out a whole-rupee amount using Indian grouping.

    >>> amount_in_words(1234567)
    'Twelve Lakh Thirty Four Thousand Five Hundred Sixty Seven'

    Groups that are zero are dropped along with their scale word. Crore
    counts above 99 are themselves spelled in Indian grouping, so 10^10
    reads "One Thousand Crore". Paise are not handled: round first.
    """
    value = _check_amount(amount)
    if value == 0:
        return ONES[0]

    parts = []
    crore, value = divmod(value, 10_000_000)
    if crore:
        words = _two_digits(crore) if crore < 100 else amount_in_words(crore)
        parts.append(f"{words} Crore")

    for scale, size in SCALES[1:]:
        group, value = divmod(value, size)
        if group:
            parts.append(f"{_two_digits(group)} {scale}")

    if value:
        parts.append(_three_digits(value))

    return " ".join(parts)
