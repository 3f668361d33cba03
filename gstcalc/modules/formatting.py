from decimal import Decimal, ROUND_HALF_UP, InvalidOperation, localcontext

from gstcalc.modules.errors import InvalidArgumentError

PAISE = Decimal("0.01")
RUPEE_SYMBOL = "₹"

# ==========================================
# HELPERS
# ==========================================


def to_dec(v):
    if v is None:
        return Decimal("0.00")
    if isinstance(v, Decimal):
        return v
    if isinstance(v, (int, float)):
        # str() keeps the shortest repr, so 2.675 rounds as written, not as stored
        return Decimal(str(v))
    try:
        return Decimal(str(v).replace(",", ""))
    except InvalidOperation:
        raise InvalidArgumentError(f"Not a number: {v!r}")


def _quantize(val: Decimal, exp: Decimal) -> Decimal:
    # Default context precision (28) is too small for very large amounts
    with localcontext() as ctx:
        ctx.prec = max(28, val.adjusted() + 3)
        return val.quantize(exp, rounding=ROUND_HALF_UP)


def round_rupees(value) -> int:
    """Nearest whole rupee, halves away from zero."""
    val = to_dec(value)
    if not val.is_finite():
        raise InvalidArgumentError(f"Cannot round non-finite amount: {value!r}")
    return int(_quantize(val, Decimal("1")))


def group_indian(digits: str) -> str:
    """'1234567' -> '12,34,567': last three digits, then pairs."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_currency(value, symbol: str = RUPEE_SYMBOL) -> str:
    val = to_dec(value)
    if not val.is_finite():
        raise InvalidArgumentError(f"Cannot format non-finite amount: {value!r}")

    val = _quantize(val, PAISE)
    sign = "-" if val < 0 else ""
    rupees, paise = format(val.copy_abs(), "f").split(".")
    return f"{sign}{symbol}{group_indian(rupees)}.{paise}"


def format_qty(value):
    try:
        val = to_dec(value)
        if val % 1 == 0:
            return "{:.0f}".format(val)
        return "{:.2f}".format(val)
    except (InvalidArgumentError, ArithmeticError):
        return str(value)


def format_rate(rate: float) -> str:
    """18.0 -> '18%', 2.5 -> '2.5%'."""
    return f"{rate:g}%"
