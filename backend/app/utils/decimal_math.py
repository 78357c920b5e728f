from decimal import Decimal, InvalidOperation, ROUND_HALF_UP


RATIO_QUANT = Decimal("0.001")
CENTS_PER_UNIT = Decimal("100")


def to_cents(value: Decimal | int | float | str | None) -> int:
    """Convert a decimal amount (usually a string from storage) to integer minor units."""
    if value is None or value == "":
        return 0
    try:
        amount = Decimal(str(value).strip())
        if not amount.is_finite():
            raise InvalidOperation
        return int((amount * CENTS_PER_UNIT).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except InvalidOperation as exc:
        raise ValueError(f"Invalid money amount: {value!r}") from exc


def round_score(value: float) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def round_ratio(value: float) -> float:
    return float(Decimal(str(value)).quantize(RATIO_QUANT, rounding=ROUND_HALF_UP))
