"""
Dynamic fee calculation for constant-product pools.
"""

import logging

from .config import DEFAULT_FEE_CONFIG, FeeConfig

logger = logging.getLogger(__name__)


def volatility_metric(
    reserve_in: float,
    input_amount: float,
    sensitivity: float = DEFAULT_FEE_CONFIG.volatility_sensitivity
) -> float:
    """
    Normalized volatility proxy in [0, 1] for a trade against a pool.

    The trade size relative to pool depth stands in for how far the trade will
    move the price. An empty or negative reserve saturates the metric.
    """
    if reserve_in <= 0:
        logger.debug("reserve_in=%s is not positive, saturating volatility metric", reserve_in)
        return 1.0

    metric = input_amount / reserve_in * sensitivity
    # NaN falls through both comparisons and is returned as is
    return min(max(metric, 0.0), 1.0)


def calculate_dynamic_fee(
    reserve_in: float,
    reserve_out: float,
    input_amount: float,
    config: FeeConfig = DEFAULT_FEE_CONFIG
) -> float:
    """
    Calculate the fee rate for a swap, scaled by the trade's relative size.

    Larger trades relative to the input reserve pay a higher fee, since they move
    the price more and expose liquidity providers to more impermanent loss:

        fee = min(base_fee + volatility_factor * volatility_metric, max_fee)

    Args:
        reserve_in: Reserve of the asset being sold to the pool.
        reserve_out: Reserve of the asset being bought. Unused by the formula,
            kept so callers can pass a full pool snapshot.
        input_amount: Amount of the input asset being sold.
        config: Fee parameters. Default is 0.3% base, up to 0.2% surcharge, 1% cap.

    Returns:
        The effective fee rate as a decimal, e.g. 0.003 for 0.3%.

    Examples:
        >>> calculate_dynamic_fee(1000, 1000, 0)
        0.003
        >>> # 100 into a 1,000 reserve saturates the metric: 0.3% + 0.2%
        >>> calculate_dynamic_fee(1000, 1000, 100)
        0.005
    """
    metric = volatility_metric(reserve_in, input_amount, config.volatility_sensitivity)
    fee = config.base_fee + config.volatility_factor * metric

    return min(fee, config.max_fee)
