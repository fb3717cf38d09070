"""
Liquidity provider returns: impermanent loss and fee APR.
"""

import logging
import math
from typing import TypedDict, Union

import numpy as np

logger = logging.getLogger(__name__)

DAYS_PER_YEAR = 365
MONTHS_PER_YEAR = 12


class RewardProjection(TypedDict):
    """Result from project_rewards function."""
    daily: float
    monthly: float
    yearly: float


def calculate_impermanent_loss(initial_price: float, current_price: float) -> float:
    """
    Calculate impermanent loss of a 50/50 position versus holding both assets.

        IL = 2 * sqrt(r) / (1 + r) - 1,  r = current_price / initial_price

    Args:
        initial_price: Price of one pooled asset in the other at deposit time.
        current_price: The same price now.

    Returns:
        Signed percentage, always <= 0 and exactly 0 when the price is unchanged.
        0 for a non-positive initial price or a negative current price.

    Examples:
        >>> calculate_impermanent_loss(2000, 2000)
        0.0
        >>> # Price doubles: about -5.72%
        >>> round(calculate_impermanent_loss(2000, 4000), 2)
        -5.72
    """
    if initial_price <= 0 or current_price < 0:
        logger.debug(
            "No impermanent loss for initial_price=%s current_price=%s",
            initial_price, current_price
        )
        return 0.0

    price_ratio = current_price / initial_price
    il = 2 * math.sqrt(price_ratio) / (1 + price_ratio) - 1

    return il * 100


def impermanent_loss_curve(price_ratios: Union[np.ndarray, list]) -> np.ndarray:
    """
    Vectorized impermanent loss (percent) over an array of price ratios.

    Non-positive ratios have no meaningful loss and come back as NaN.

    Examples:
        >>> impermanent_loss_curve([1.0, 4.0]).round(2)
        array([  0., -20.])
    """
    r = np.asarray(price_ratios, dtype=float)
    with np.errstate(invalid="ignore", divide="ignore"):
        il = (2 * np.sqrt(r) / (1 + r) - 1) * 100
    return np.where(r > 0, il, np.nan)


def calculate_apr(fees_24h: float, total_liquidity_usd: float) -> float:
    """
    Annualize one day of fees into a percentage return on pool liquidity.

    Args:
        fees_24h: Fees earned by the pool over the last 24 hours, in USD.
        total_liquidity_usd: Pool value (TVL) in USD.

    Returns:
        APR in percent. 0 when the pool holds no liquidity.

    Examples:
        >>> round(calculate_apr(1000, 2_000_000), 2)
        18.25
    """
    if total_liquidity_usd <= 0:
        return 0.0

    daily_return = fees_24h / total_liquidity_usd
    return daily_return * DAYS_PER_YEAR * 100


def project_rewards(amount: float, apr: float, boost: float = 1.0) -> RewardProjection:
    """
    Project simple (non-compounding) rewards on an amount at a given APR.

    Args:
        amount: Amount staked or provided, in reward token units.
        apr: Annual percentage rate, e.g. the output of calculate_apr.
        boost: Multiplier applied to the APR, default 1 (no boost).

    Returns:
        A dict with daily, monthly and yearly rewards.

    Examples:
        >>> project_rewards(1000, 36.5)["daily"]
        1.0
        >>> project_rewards(1000, 10, boost=1.5)["yearly"]
        150.0
    """
    yearly = amount * apr * boost / 100

    return RewardProjection(
        daily=yearly / DAYS_PER_YEAR,
        monthly=yearly / MONTHS_PER_YEAR,
        yearly=yearly
    )
