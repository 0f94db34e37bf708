"""Currency display conversion.

Amounts are always stored and analysed in the base currency (USD). The other
supported currency only exists at the presentation boundary, using a fixed
conversion rate.
"""

from typing import Literal

from spendwise.domain.models import Money

Currency = Literal["USD", "INR"]

BASE_CURRENCY: Currency = "USD"
SUPPORTED_CURRENCIES: tuple[Currency, ...] = ("USD", "INR")
DEFAULT_CONVERSION_RATE = 83.0

SYMBOLS: dict[str, str] = {
    "USD": "$",
    "INR": "₹",
}


def validate_currency(currency: str) -> tuple[bool, str | None]:
    """Validate a currency code.

    Args:
        currency: Currency code, already upper-cased.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if currency not in SUPPORTED_CURRENCIES:
        return False, f"Unsupported currency '{currency}'. Choose from: {', '.join(SUPPORTED_CURRENCIES)}"
    return True, None


def _require_supported(currency: str) -> None:
    is_valid, error = validate_currency(currency)
    if not is_valid:
        raise ValueError(error)


def to_display(amount: Money, currency: str, rate: float = DEFAULT_CONVERSION_RATE) -> float:
    """Convert a base-currency amount for display.

    Raises:
        ValueError: If the currency is not supported.
    """
    _require_supported(currency)
    if currency == BASE_CURRENCY:
        return amount
    return amount * rate


def to_base(amount: float, currency: str, rate: float = DEFAULT_CONVERSION_RATE) -> Money:
    """Convert an amount entered in the display currency back to the base currency.

    Raises:
        ValueError: If the currency is not supported.
    """
    _require_supported(currency)
    if currency == BASE_CURRENCY:
        return Money(amount)
    return Money(amount / rate)


def format_amount(amount: Money, currency: str, rate: float = DEFAULT_CONVERSION_RATE) -> str:
    """Format a base-currency amount in the display currency.

    Args:
        amount: Amount in the base currency.
        currency: Display currency code.
        rate: Base to display conversion rate.

    Returns:
        String such as "$ 1,234.50".

    Raises:
        ValueError: If the currency is not supported.
    """
    display = to_display(amount, currency, rate)
    return f"{SYMBOLS[currency]} {display:,.2f}"
