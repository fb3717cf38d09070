"""
Swap quotes for constant-product pools.

Pricing follows (x + dx)(y - dy) = x * y with the fee taken from the input:

    dy = y * dx * (1 - fee) / (x + dx * (1 - fee))
"""

import logging
import math
from typing import List, Optional, TypedDict

from .config import DEFAULT_FEE_CONFIG, FeeConfig
from .fees import calculate_dynamic_fee

logger = logging.getLogger(__name__)

DIRECT_ROUTE = "Direct"


class SwapQuote(TypedDict):
    """Result from calculate_swap_output function."""
    output_amount: float
    price_impact: float
    minimum_received: float
    fee: float
    dynamic_fee_rate: float
    route: List[str]


def zero_quote() -> SwapQuote:
    """The quote returned when no trade is possible (no liquidity or no input)."""
    return SwapQuote(
        output_amount=0.0,
        price_impact=0.0,
        minimum_received=0.0,
        fee=0.0,
        dynamic_fee_rate=0.0,
        route=[]
    )


def get_spot_price(input_reserve: float, output_reserve: float) -> float:
    """Marginal price of the input asset in output units, 0 for an empty pool."""
    if input_reserve <= 0 or output_reserve <= 0:
        return 0.0
    return output_reserve / input_reserve


def calculate_swap_output(
    input_amount: float,
    input_reserve: float,
    output_reserve: float,
    custom_fee: Optional[float] = None,
    config: FeeConfig = DEFAULT_FEE_CONFIG
) -> SwapQuote:
    """
    Quote the output of selling input_amount into a constant-product pool.

    Args:
        input_amount: Amount of the asset sold to the pool.
        input_reserve: Pool reserve of the asset being sold.
        output_reserve: Pool reserve of the asset being bought.
        custom_fee: Fee rate override as a decimal (0.003 = 0.3%). When None the
            dynamic fee from calculate_dynamic_fee is used.
        config: Fee and slippage parameters.

    Returns:
        A dict with:
        - output_amount: Amount of the output asset received
        - price_impact: Percent gap between spot and execution price
        - minimum_received: output_amount less slippage tolerance; advisory,
          callers enforce it when submitting the trade
        - fee: Fee paid, in input asset units
        - dynamic_fee_rate: Fee rate applied, in percent
        - route: ["Direct"], or [] for the zero quote

        A non-positive input or reserve returns the zero quote instead of raising.

    Raises:
        ValueError: If custom_fee is outside [0, 1).

    Examples:
        >>> quote = calculate_swap_output(100, 1000, 1000)
        >>> round(quote["output_amount"], 4)
        90.4957
        >>> quote["route"]
        ['Direct']
        >>> calculate_swap_output(0, 1000, 1000)["route"]
        []
    """
    if custom_fee is not None and not 0 <= custom_fee < 1:
        raise ValueError(f"custom_fee must be in [0, 1), got {custom_fee}")

    if input_amount <= 0 or input_reserve <= 0 or output_reserve <= 0:
        logger.debug(
            "No quote for input_amount=%s input_reserve=%s output_reserve=%s",
            input_amount, input_reserve, output_reserve
        )
        return zero_quote()

    if custom_fee is None:
        fee_rate = calculate_dynamic_fee(input_reserve, output_reserve, input_amount, config)
    else:
        fee_rate = custom_fee

    input_after_fee = input_amount * (1 - fee_rate)

    # Scale both terms to at most 1 so neither the sum nor the product can
    # overflow; the ratio is in [0, 1]
    scale = max(input_reserve, input_after_fee)
    ratio = (input_after_fee / scale) / (input_reserve / scale + input_after_fee / scale)
    output_amount = output_reserve * ratio

    # Exact result is always below output_reserve, but a trade many orders of
    # magnitude larger than the pool can round up to it
    if output_amount >= output_reserve:
        logger.debug("Output rounded up to reserve %s, stepping below it", output_reserve)
        output_amount = math.nextafter(output_reserve, 0.0)

    spot_price = output_reserve / input_reserve
    execution_price = output_amount / input_amount
    price_impact = (spot_price - execution_price) / spot_price * 100

    return SwapQuote(
        output_amount=output_amount,
        price_impact=price_impact,
        minimum_received=output_amount * (1 - config.slippage_tolerance),
        fee=input_amount * fee_rate,
        dynamic_fee_rate=fee_rate * 100,
        route=[DIRECT_ROUTE]
    )


def is_high_price_impact(quote: SwapQuote, config: FeeConfig = DEFAULT_FEE_CONFIG) -> bool:
    """Whether a quote moves the price by more than config.high_impact_threshold percent."""
    return quote["price_impact"] > config.high_impact_threshold
