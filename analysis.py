"""
Pool Analytics Report

Runs the engine over a set of sample pool snapshots:
1. Pool overview - spot price, TVL, fee APR
2. Swap quotes - dynamic fee and price impact across trade sizes
3. Liquidity - deposit split, refund of excess, withdrawal
4. Impermanent loss across price moves
5. Fees from a simulated day of trades

Usage:
    python analysis.py
"""

import numpy as np
import pandas as pd

from cpamm import (
    calculate_deposit,
    calculate_impermanent_loss,
    calculate_liquidity_burn_percent,
    calculate_swap_output,
    calc_fees_from_trades,
    impermanent_loss_curve,
    is_high_price_impact,
    pool_summary,
    quote_deposit_amount,
    quote_trades,
)

# ETH priced at 2,000 USD for TVL; stablecoins at 1 USD
POOLS = pd.DataFrame({
    "pair": ["ETH/USDC", "DAI/USDC", "WBTC/ETH"],
    "reserve0": [1250.5, 1000000.0, 45.8],
    "reserve1": [2500000.0, 1000000.0, 750.2],
    "total_liquidity": [2500.0, 1000.0, 890.0],
    "volume_24h": [5400000.0, 2100000.0, 3200000.0],
    "fees_24h": [16200.0, 6300.0, 9600.0],
    "tvl_usd": [1250.5 * 2000 + 2500000.0, 2000000.0, 750.2 * 2000 * 2],
})


def main():
    print("=" * 60)
    print("Pool Analytics Report")
    print("=" * 60)

    summary = pool_summary(POOLS)
    print("\nPool Overview:")
    print(summary[["pair", "spot_price", "tvl_usd", "fees_24h", "apr"]].to_string(index=False))
    print(f"\n  Total TVL: ${summary['tvl_usd'].sum():,.0f}")
    print(f"  Total 24h volume: ${summary['volume_24h'].sum():,.0f}")
    print(f"  Total 24h fees: ${summary['fees_24h'].sum():,.0f}")

    # Swap quotes on ETH/USDC
    eth_usdc = POOLS.iloc[0]
    print("\n" + "-" * 60)
    print("Swap Quotes: ETH -> USDC")
    print("-" * 60)
    for amount in [0.5, 5.0, 50.0, 250.0]:
        quote = calculate_swap_output(amount, eth_usdc["reserve0"], eth_usdc["reserve1"])
        flag = "  HIGH IMPACT" if is_high_price_impact(quote) else ""
        print(
            f"  {amount:>7.2f} ETH -> {quote['output_amount']:>12,.2f} USDC"
            f"  fee {quote['dynamic_fee_rate']:.3f}%"
            f"  impact {quote['price_impact']:.2f}%{flag}"
        )

    # Liquidity on ETH/USDC
    print("\n" + "-" * 60)
    print("Liquidity: ETH/USDC")
    print("-" * 60)
    usdc_needed = quote_deposit_amount(1.0, eth_usdc["reserve0"], eth_usdc["reserve1"])
    print(f"\n  1 ETH pairs with {usdc_needed:,.2f} USDC at the pool ratio")

    deposit = calculate_deposit(
        1.0, 2500.0,
        eth_usdc["reserve0"], eth_usdc["reserve1"], eth_usdc["total_liquidity"]
    )
    print(f"  Depositing 1 ETH + 2,500 USDC:")
    print(f"    LP tokens minted: {deposit['liquidity']:.6f}")
    print(f"    Used: {deposit['amount0_used']:.6f} ETH + {deposit['amount1_used']:,.2f} USDC")
    print(f"    Refunded: {deposit['amount0_refund']:.6f} ETH + {deposit['amount1_refund']:,.2f} USDC")
    print(f"    Pool share: {deposit['pool_share']:.4f}%")

    eth_out, usdc_out = calculate_liquidity_burn_percent(
        50,
        deposit["liquidity"],
        eth_usdc["total_liquidity"] + deposit["liquidity"],
        eth_usdc["reserve0"] + deposit["amount0_used"],
        eth_usdc["reserve1"] + deposit["amount1_used"],
    )
    print(f"  Withdrawing 50%: {eth_out:.6f} ETH + {usdc_out:,.2f} USDC")

    # Impermanent loss
    print("\n" + "-" * 60)
    print("Impermanent Loss")
    print("-" * 60)
    print(f"\n  ETH 2,000 -> 2,100: {calculate_impermanent_loss(2000, 2100):.4f}%")
    ratios = np.array([0.25, 0.5, 0.75, 1.0, 1.25, 1.5, 2.0, 3.0, 5.0])
    il_table = pd.DataFrame({"price_ratio": ratios, "il_pct": impermanent_loss_curve(ratios)})
    print(il_table.to_string(index=False))

    # A simulated day of trades against a fixed snapshot
    print("\n" + "-" * 60)
    print("Fees: simulated ETH -> USDC trades")
    print("-" * 60)
    rng = np.random.default_rng(42)
    n_trades = 500
    trades = pd.DataFrame({
        "timestamp": pd.Timestamp("2026-01-01") + pd.to_timedelta(
            np.sort(rng.uniform(0, 24 * 3600, n_trades)), unit="s"
        ),
        "amount_in": rng.lognormal(mean=0.0, sigma=1.0, size=n_trades),
        "reserve_in": eth_usdc["reserve0"],
        "reserve_out": eth_usdc["reserve1"],
    })
    quoted = quote_trades(trades)
    hourly = calc_fees_from_trades(quoted, freq="6h")
    print(hourly.to_string(index=False))
    print(f"\n  Total fees: {quoted['fee'].sum():.4f} ETH")
    print(f"  Mean fee rate: {quoted['dynamic_fee_rate'].mean():.4f}%")


if __name__ == "__main__":
    main()
