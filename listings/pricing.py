import re
import math
import logging
from decimal import Decimal, InvalidOperation
from typing import Iterable, List

from .errors import ValidationError
from .schema import FieldDetail

logger = logging.getLogger(__name__)

# Plain decimal literal: no digit separators, no nan/inf spellings
PRICE_LITERAL = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")


def parse_price(raw) -> float:
    """Parse a text price; non-numeric or non-finite values are rejected"""
    text = str(raw).strip()
    if not PRICE_LITERAL.match(text):
        raise ValidationError(f"Invalid price value: {raw}", step="derive_price")

    try:
        value = Decimal(text)
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Invalid price value: {raw}", step="derive_price")

    if not value.is_finite():
        raise ValidationError(f"Invalid price value: {raw}", step="derive_price")

    price = float(value)
    if not math.isfinite(price):
        raise ValidationError(f"Invalid price value: {raw}", step="derive_price")
    return price


def slot_prices(field_details: Iterable[FieldDetail]) -> List[float]:
    return [parse_price(field.price) for field in field_details]


def derive_base_price(field_details: Iterable[FieldDetail]) -> float:
    """
    Starting-from price of a resource: the minimum of its slot prices.

    Raises:
        ValidationError: no field details, or any price that is not a finite number
    """
    prices = slot_prices(field_details)
    if not prices:
        raise ValidationError("No field details provided", step="derive_price")

    base_price = min(prices)
    logger.info(f"Calculated base price: {base_price}")
    return base_price
