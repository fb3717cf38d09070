"""
Batch helpers applying the engine to tables of trades and pools.
"""

from typing import Iterable
import pandas as pd

from .config import DEFAULT_FEE_CONFIG, FeeConfig
from .returns import calculate_apr
from .swap import calculate_swap_output, get_spot_price


def _require_columns(df: pd.DataFrame, columns: Iterable[str]) -> None:
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ValueError(f"Expected columns: {', '.join(missing)}")


def quote_trades(trades: pd.DataFrame, config: FeeConfig = DEFAULT_FEE_CONFIG) -> pd.DataFrame:
    """
    Quote every row of a trades table against its own pool snapshot.

    Args:
        trades: Trades table with columns amount_in, reserve_in, reserve_out
            (reserves as seen just before each trade). An optional custom_fee
            column overrides the dynamic fee where it is not null.
        config: Fee and slippage parameters.

    Returns:
        A copy of the trades table with output_amount, price_impact,
        minimum_received, fee and dynamic_fee_rate columns added.

    Examples:
        >>> import pandas as pd
        >>> trades = pd.DataFrame({
        ...     'amount_in': [10.0, 100.0],
        ...     'reserve_in': [1000.0, 1000.0],
        ...     'reserve_out': [1000.0, 1000.0]
        ... })
        >>> quote_trades(trades)["dynamic_fee_rate"].round(2).tolist()
        [0.32, 0.5]
    """
    _require_columns(trades, ["amount_in", "reserve_in", "reserve_out"])

    has_custom_fee = "custom_fee" in trades.columns
    quotes = []
    for row in trades.itertuples(index=False):
        custom_fee = row.custom_fee if has_custom_fee else None
        if custom_fee is not None and pd.isna(custom_fee):
            custom_fee = None
        quote = calculate_swap_output(
            row.amount_in, row.reserve_in, row.reserve_out,
            custom_fee=custom_fee, config=config
        )
        quotes.append(quote)

    columns = ["output_amount", "price_impact", "minimum_received", "fee", "dynamic_fee_rate"]
    result = trades.copy()
    quoted = pd.DataFrame(quotes, columns=columns, index=trades.index, dtype=float)
    for column in columns:
        result[column] = quoted[column]

    return result


def calc_fees_from_trades(trades: pd.DataFrame, freq: str = "1D") -> pd.DataFrame:
    """
    Total fees collected per period from a table of quoted trades.

    Args:
        trades: Trades table with columns timestamp (datetime) and fee, e.g. the
            output of quote_trades with a timestamp column.
        freq: Pandas frequency string ('1D', '1h', etc.)

    Returns:
        A table with timestamp (period start), fees and num_trades columns.
    """
    _require_columns(trades, ["timestamp", "fee"])

    df = trades.set_index("timestamp").sort_index()

    fees = df["fee"].resample(freq).sum().rename("fees")
    counts = df["fee"].resample(freq).count().rename("num_trades")

    return pd.concat([fees, counts], axis=1).reset_index()


def pool_summary(pools: pd.DataFrame) -> pd.DataFrame:
    """
    Add spot price and fee APR to a table of pool snapshots.

    Args:
        pools: Pools table with columns reserve0, reserve1, fees_24h and tvl_usd.

    Returns:
        A copy of the pools table with spot_price (token 1 per token 0) and
        apr (percent) columns.
    """
    _require_columns(pools, ["reserve0", "reserve1", "fees_24h", "tvl_usd"])

    result = pools.copy()
    result["spot_price"] = [
        get_spot_price(r0, r1) for r0, r1 in zip(result["reserve0"], result["reserve1"])
    ]
    result["apr"] = [
        calculate_apr(fees, tvl) for fees, tvl in zip(result["fees_24h"], result["tvl_usd"])
    ]

    return result
