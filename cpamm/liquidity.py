"""
Liquidity token mint and burn calculations for constant-product pools.

Amounts are floats. Functions taking a `decimals` argument can floor their
results to whole token units; flooring always rounds in the pool's favour.
"""

import logging
import math
from fractions import Fraction
from typing import Optional, Tuple, TypedDict

logger = logging.getLogger(__name__)


class DepositResult(TypedDict):
    """Result from calculate_deposit function."""
    liquidity: float
    amount0_used: float
    amount1_used: float
    amount0_refund: float
    amount1_refund: float
    pool_share: float


def floor_to_decimals(amount: float, decimals: Optional[int]) -> float:
    """
    Floor an amount to 10 ** -decimals using exact rational arithmetic.

    None leaves the amount untouched. The result is never greater than amount.

    Examples:
        >>> floor_to_decimals(1.23456789, 4)
        1.2345
        >>> floor_to_decimals(2.5, None)
        2.5
    """
    if decimals is None:
        return amount
    if decimals < 0:
        raise ValueError(f"decimals must be >= 0, got {decimals}")
    if not math.isfinite(amount):
        return amount

    scale = 10 ** decimals
    units = math.floor(Fraction(amount) * scale)
    return units / scale


def calculate_liquidity_mint(
    amount0: float,
    amount1: float,
    reserve0: float,
    reserve1: float,
    total_liquidity: float,
    decimals: Optional[int] = None
) -> float:
    """
    Calculate how many liquidity tokens a deposit mints.

    The first deposit into an empty pool mints the geometric mean of the two
    amounts, so the initial supply does not depend on the tokens' units. Later
    deposits mint in proportion to the pool and take the smaller of the two
    sides, so an off-ratio deposit is diluted rather than rejected. See
    calculate_deposit for the amounts actually taken and the excess refunded.

    Args:
        amount0: Amount of token 0 deposited.
        amount1: Amount of token 1 deposited.
        reserve0: Current pool reserve of token 0.
        reserve1: Current pool reserve of token 1.
        total_liquidity: Outstanding liquidity token supply.
        decimals: Liquidity token decimals. When given, the result is floored
            to whole token units.

    Returns:
        Liquidity tokens to mint. 0 for a non-positive amount, a negative supply,
        or a non-positive reserve in a pool that already has supply.

    Examples:
        >>> # First deposit: sqrt(100 * 400)
        >>> calculate_liquidity_mint(100, 400, 0, 0, 0)
        200.0
        >>> # Matching deposit of 10% of a 1,000 / 4,000 pool with 2,000 supply
        >>> calculate_liquidity_mint(100, 400, 1000, 4000, 2000)
        200.0
    """
    if amount0 <= 0 or amount1 <= 0 or total_liquidity < 0:
        logger.debug(
            "Nothing to mint for amount0=%s amount1=%s total_liquidity=%s",
            amount0, amount1, total_liquidity
        )
        return 0.0

    if total_liquidity == 0:
        return floor_to_decimals(math.sqrt(amount0 * amount1), decimals)

    if reserve0 <= 0 or reserve1 <= 0:
        logger.debug(
            "Pool with supply %s has empty reserves (%s, %s), minting nothing",
            total_liquidity, reserve0, reserve1
        )
        return 0.0

    liquidity0 = amount0 * total_liquidity / reserve0
    liquidity1 = amount1 * total_liquidity / reserve1

    # min() keeps its first argument when the other is NaN
    if math.isnan(liquidity0) or math.isnan(liquidity1):
        return math.nan

    return floor_to_decimals(min(liquidity0, liquidity1), decimals)


def quote_deposit_amount(amount0: float, reserve0: float, reserve1: float) -> float:
    """
    Amount of token 1 that matches amount0 at the pool's current ratio.

    Examples:
        >>> # 1 ETH into a 1,250.5 ETH / 2,500,000 USDC pool
        >>> round(quote_deposit_amount(1, 1250.5, 2500000), 6)
        1999.20032
    """
    if amount0 <= 0 or reserve0 <= 0 or reserve1 <= 0:
        return 0.0
    return amount0 * reserve1 / reserve0


def get_pool_share(liquidity: float, total_liquidity: float) -> float:
    """Percent of the liquidity supply held by a position, 0 for an empty pool."""
    if total_liquidity <= 0 or liquidity <= 0:
        return 0.0
    return min(liquidity / total_liquidity, 1.0) * 100


def calculate_deposit(
    amount0: float,
    amount1: float,
    reserve0: float,
    reserve1: float,
    total_liquidity: float,
    decimals: Optional[int] = None
) -> DepositResult:
    """
    Split a deposit into the amounts the pool takes and the excess refunded.

    The pool only takes amounts in its current ratio. Whichever side limits the
    mint is taken in full; the other side is taken in proportion and its
    remainder is refunded to the depositor rather than donated to the pool.
    The first deposit sets the ratio, so it is taken in full.

    Args:
        amount0: Amount of token 0 offered.
        amount1: Amount of token 1 offered.
        reserve0: Current pool reserve of token 0.
        reserve1: Current pool reserve of token 1.
        total_liquidity: Outstanding liquidity token supply.
        decimals: Liquidity token decimals, see calculate_liquidity_mint.

    Returns:
        A dict with liquidity minted, amounts used, amounts refunded, and the
        depositor's pool share in percent after the mint.

    Examples:
        >>> # 1,000 / 4,000 pool; 100 token 0 only needs 400 token 1
        >>> result = calculate_deposit(100, 500, 1000, 4000, 2000)
        >>> result["liquidity"], result["amount1_used"], result["amount1_refund"]
        (200.0, 400.0, 100.0)
    """
    liquidity = calculate_liquidity_mint(
        amount0, amount1, reserve0, reserve1, total_liquidity, decimals
    )

    if math.isnan(liquidity):
        return DepositResult(
            liquidity=math.nan,
            amount0_used=math.nan,
            amount1_used=math.nan,
            amount0_refund=math.nan,
            amount1_refund=math.nan,
            pool_share=math.nan
        )

    if liquidity <= 0:
        return DepositResult(
            liquidity=0.0,
            amount0_used=0.0,
            amount1_used=0.0,
            amount0_refund=max(amount0, 0.0),
            amount1_refund=max(amount1, 0.0),
            pool_share=0.0
        )

    if total_liquidity == 0:
        amount0_used, amount1_used = amount0, amount1
    else:
        # Tokens backing the minted liquidity; never more than offered
        amount0_used = min(liquidity * reserve0 / total_liquidity, amount0)
        amount1_used = min(liquidity * reserve1 / total_liquidity, amount1)

    return DepositResult(
        liquidity=liquidity,
        amount0_used=amount0_used,
        amount1_used=amount1_used,
        amount0_refund=amount0 - amount0_used,
        amount1_refund=amount1 - amount1_used,
        pool_share=get_pool_share(liquidity, total_liquidity + liquidity)
    )


def calculate_liquidity_burn(
    liquidity_amount: float,
    total_liquidity: float,
    reserve0: float,
    reserve1: float,
    decimals: Optional[int] = None
) -> Tuple[float, float]:
    """
    Calculate the tokens returned for burning liquidity tokens.

    Args:
        liquidity_amount: Liquidity tokens burned. Clamped to [0, total_liquidity].
        total_liquidity: Outstanding liquidity token supply.
        reserve0: Current pool reserve of token 0.
        reserve1: Current pool reserve of token 1.
        decimals: Token decimals. When given, both amounts are floored to
            whole token units.

    Returns:
        (amount0, amount1) proportional to the burned share of supply.
        (0.0, 0.0) when the pool has no supply.

    Examples:
        >>> calculate_liquidity_burn(200, 2000, 1000, 4000)
        (100.0, 400.0)
    """
    if total_liquidity <= 0:
        logger.debug("Cannot burn from a pool with total_liquidity=%s", total_liquidity)
        return (0.0, 0.0)

    if liquidity_amount > total_liquidity or liquidity_amount < 0:
        logger.warning(
            "Burn of %s clamped to supply range [0, %s]", liquidity_amount, total_liquidity
        )
        liquidity_amount = min(max(liquidity_amount, 0.0), total_liquidity)

    amount0 = liquidity_amount * reserve0 / total_liquidity
    amount1 = liquidity_amount * reserve1 / total_liquidity

    return (
        floor_to_decimals(amount0, decimals),
        floor_to_decimals(amount1, decimals)
    )


def calculate_liquidity_burn_percent(
    percent: float,
    user_liquidity: float,
    total_liquidity: float,
    reserve0: float,
    reserve1: float
) -> Tuple[float, float]:
    """
    Tokens returned for withdrawing a percentage of a user's position.

    Examples:
        >>> # Remove half of a 200 token position from a 1,000 / 4,000 pool
        >>> calculate_liquidity_burn_percent(50, 200, 2000, 1000, 4000)
        (50.0, 200.0)
    """
    percent = min(max(percent, 0.0), 100.0)
    liquidity_amount = user_liquidity * percent / 100

    return calculate_liquidity_burn(liquidity_amount, total_liquidity, reserve0, reserve1)
