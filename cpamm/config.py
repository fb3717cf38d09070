"""
Fee configuration for the constant-product engine.

All fee-aware functions take a FeeConfig explicitly. Rates are expressed as
decimals (0.003 = 0.3%), the price impact threshold as a percentage.
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class FeeConfig:
    """
    Parameters for dynamic fees and swap quotes.

    Args:
        base_fee: Fee rate charged on every swap, default 0.3% (0.003).
        volatility_factor: Maximum surcharge added on top of base_fee, default 0.2%.
        volatility_sensitivity: Multiplier applied to input_amount / reserve_in
            before it is clamped to [0, 1]. Default 10, so a trade of 10% of the
            input reserve already pays the full surcharge.
        max_fee: Hard cap on the blended fee rate, default 1% (0.01).
        slippage_tolerance: Used to derive minimum_received, default 0.5%.
        high_impact_threshold: Price impact (in percent) above which a quote is
            considered high impact. Default 5.

    Examples:
        >>> FeeConfig().base_fee
        0.003
        >>> FeeConfig(base_fee=0.0005, volatility_factor=0.0).max_fee
        0.01
    """
    base_fee: float = 0.003
    volatility_factor: float = 0.002
    volatility_sensitivity: float = 10.0
    max_fee: float = 0.01
    slippage_tolerance: float = 0.005
    high_impact_threshold: float = 5.0

    def __post_init__(self) -> None:
        for name in (
            "base_fee", "volatility_factor", "volatility_sensitivity",
            "max_fee", "slippage_tolerance", "high_impact_threshold",
        ):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ValueError(f"{name} must be finite, got {value}")
        for name in ("base_fee", "volatility_factor", "max_fee", "slippage_tolerance"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be >= 0, got {value}")
            if value >= 1:
                raise ValueError(f"{name} must be < 1, got {value}")
        if self.volatility_sensitivity < 0:
            raise ValueError(
                f"volatility_sensitivity must be >= 0, got {self.volatility_sensitivity}"
            )
        if self.high_impact_threshold < 0:
            raise ValueError(
                f"high_impact_threshold must be >= 0, got {self.high_impact_threshold}"
            )
        if self.base_fee > self.max_fee:
            raise ValueError(
                f"base_fee ({self.base_fee}) must not exceed max_fee ({self.max_fee})"
            )


DEFAULT_FEE_CONFIG = FeeConfig()
