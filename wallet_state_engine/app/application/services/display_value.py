from __future__ import annotations

from decimal import ROUND_DOWN, ROUND_FLOOR, ROUND_HALF_UP, Context, Decimal, localcontext

from eth_utils import from_wei

from wallet_state_engine.app.domain.models import Quote

# Wide enough for uint256 amounts shifted by any realistic number of decimals.
WIDE_CONTEXT = Context(prec=100)

LESS_THAN_A_CENT = "< 0.01"
DUST_BALANCE = "<0.001"

_CENT = Decimal("0.01")
_DUST = Decimal("0.001")


def shift_decimals(amount: int | Decimal, decimals: int) -> Decimal:
    """Base units -> whole units (amount / 10**decimals), exact."""
    with localcontext(WIDE_CONTEXT):
        return Decimal(amount).scaleb(-decimals)


def _quantum(decimals: int) -> Decimal:
    return Decimal(1).scaleb(-decimals)


def _trim(text: str) -> str:
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_usd_rate(rate: Decimal | None, decimals: int = 2) -> str:
    """Grouped, fixed-point USD amount ("1,234.57")."""
    if rate is None or rate.is_nan():
        return f"{Decimal(0):.{decimals}f}"

    with localcontext(WIDE_CONTEXT):
        rounded = rate.quantize(_quantum(decimals), rounding=ROUND_HALF_UP)
        return f"{rounded:,.{decimals}f}"


def format_amount(value: Decimal, max_decimals: int, *, rounding: str = ROUND_HALF_UP) -> str:
    """Grouped amount with at most `max_decimals` fractional digits, trailing zeros dropped."""
    with localcontext(WIDE_CONTEXT):
        rounded = value.quantize(_quantum(max_decimals), rounding=rounding)
        return _trim(f"{rounded:,.{max_decimals}f}")


def format_balance(balance: Decimal, total_value: Decimal, decimals: int = 6) -> str:
    if balance != 0 and balance < _DUST and total_value < 1:
        return DUST_BALANCE
    return format_amount(balance, decimals, rounding=ROUND_FLOOR)


def format_native(amount: Decimal, decimals: int, precision: int = 6) -> str:
    """Base-unit amount of a native currency as a whole-unit display string."""
    return format_amount(shift_decimals(amount, decimals), precision)


def gas_price_display(fee_per_gas: Decimal | int) -> tuple[str, str]:
    """
    Gas price in Gwei when it has a visible Gwei value, otherwise in Wei.

    Returns (value, unit label).
    """
    wei = int(fee_per_gas)
    gwei = from_wei(wei, "gwei")

    with localcontext(WIDE_CONTEXT):
        visible = Decimal(gwei).quantize(_quantum(6), rounding=ROUND_DOWN)

    if visible > 0:
        return _trim(f"{visible:f}"), "Gwei"
    return str(wei), "Wei"


def to_usd(
    amount: Decimal | int,
    *,
    decimals: int,
    quote: Quote | None,
    is_testnet: bool = False,
) -> Decimal | None:
    """
    USD value of a base-unit amount.

    Test networks are always worth 0. Without a quote the value is unknown
    and None is returned.
    """
    if is_testnet:
        return Decimal(0)
    if quote is None:
        return None

    with localcontext(WIDE_CONTEXT):
        return shift_decimals(amount, decimals) * quote.price


def display_usd(usd: Decimal | None) -> str | None:
    if usd is None:
        return None
    if 0 < usd < _CENT:
        return LESS_THAN_A_CENT
    return format_usd_rate(usd, 2)
