"""
Constant-product AMM calculation utilities.

This package provides pure functions for x * y = k pools: dynamic fees, swap
quotes, liquidity token mint/burn amounts, impermanent loss and fee APR.
"""

from .config import FeeConfig, DEFAULT_FEE_CONFIG
from .fees import calculate_dynamic_fee, volatility_metric
from .swap import SwapQuote, calculate_swap_output, get_spot_price, is_high_price_impact, zero_quote
from .liquidity import (
    DepositResult,
    calculate_liquidity_mint,
    calculate_deposit,
    calculate_liquidity_burn,
    calculate_liquidity_burn_percent,
    quote_deposit_amount,
    get_pool_share,
    floor_to_decimals,
)
from .returns import (
    RewardProjection,
    calculate_impermanent_loss,
    impermanent_loss_curve,
    calculate_apr,
    project_rewards,
)
from .utils import quote_trades, calc_fees_from_trades, pool_summary

__all__ = [
    "FeeConfig",
    "DEFAULT_FEE_CONFIG",
    "calculate_dynamic_fee",
    "volatility_metric",
    "SwapQuote",
    "calculate_swap_output",
    "get_spot_price",
    "is_high_price_impact",
    "zero_quote",
    "DepositResult",
    "calculate_liquidity_mint",
    "calculate_deposit",
    "calculate_liquidity_burn",
    "calculate_liquidity_burn_percent",
    "quote_deposit_amount",
    "get_pool_share",
    "floor_to_decimals",
    "calculate_impermanent_loss",
    "impermanent_loss_curve",
    "calculate_apr",
    "RewardProjection",
    "project_rewards",
    "quote_trades",
    "calc_fees_from_trades",
    "pool_summary",
]
