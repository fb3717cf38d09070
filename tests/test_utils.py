"""
Tests for the pandas batch helpers.
"""

import pandas as pd
import pytest

from cpamm import (
    calc_fees_from_trades,
    calculate_apr,
    calculate_swap_output,
    pool_summary,
    quote_trades,
)


class TestQuoteTrades:
    """Tests for quote_trades function."""

    def test_matches_single_quotes(self):
        trades = pd.DataFrame({
            "amount_in": [1.0, 10.0, 100.0],
            "reserve_in": [1000.0, 1000.0, 1000.0],
            "reserve_out": [1000.0, 2000.0, 1000.0],
        })
        result = quote_trades(trades)

        for i, row in trades.iterrows():
            quote = calculate_swap_output(row["amount_in"], row["reserve_in"], row["reserve_out"])
            assert result.loc[i, "output_amount"] == pytest.approx(quote["output_amount"])
            assert result.loc[i, "fee"] == pytest.approx(quote["fee"])
            assert result.loc[i, "price_impact"] == pytest.approx(quote["price_impact"])

    def test_does_not_mutate_input(self):
        trades = pd.DataFrame({"amount_in": [1.0], "reserve_in": [10.0], "reserve_out": [10.0]})
        quote_trades(trades)
        assert list(trades.columns) == ["amount_in", "reserve_in", "reserve_out"]

    def test_custom_fee_column(self):
        trades = pd.DataFrame({
            "amount_in": [100.0, 100.0],
            "reserve_in": [1000.0, 1000.0],
            "reserve_out": [1000.0, 1000.0],
            "custom_fee": [0.001, None],
        })
        result = quote_trades(trades)
        assert result.loc[0, "dynamic_fee_rate"] == pytest.approx(0.1)
        assert result.loc[1, "dynamic_fee_rate"] == pytest.approx(0.5)

    def test_degenerate_rows(self):
        trades = pd.DataFrame({
            "amount_in": [0.0, 10.0],
            "reserve_in": [1000.0, 0.0],
            "reserve_out": [1000.0, 1000.0],
        })
        result = quote_trades(trades)
        assert (result["output_amount"] == 0).all()
        assert (result["fee"] == 0).all()

    def test_missing_columns(self):
        with pytest.raises(ValueError, match="reserve_out"):
            quote_trades(pd.DataFrame({"amount_in": [1.0], "reserve_in": [1.0]}))


class TestCalcFeesFromTrades:
    """Tests for calc_fees_from_trades function."""

    def test_daily_totals(self):
        trades = pd.DataFrame({
            "timestamp": pd.to_datetime([
                "2026-01-01 01:00", "2026-01-01 13:00", "2026-01-02 09:00",
            ]),
            "fee": [1.5, 2.5, 4.0],
        })
        result = calc_fees_from_trades(trades, freq="1D")

        assert list(result.columns) == ["timestamp", "fees", "num_trades"]
        assert result["fees"].tolist() == [4.0, 4.0]
        assert result["num_trades"].tolist() == [2, 1]

    def test_unsorted_input(self):
        trades = pd.DataFrame({
            "timestamp": pd.to_datetime(["2026-01-02 09:00", "2026-01-01 01:00"]),
            "fee": [4.0, 1.0],
        })
        result = calc_fees_from_trades(trades)
        assert result["fees"].tolist() == [1.0, 4.0]

    def test_missing_columns(self):
        with pytest.raises(ValueError, match="fee"):
            calc_fees_from_trades(pd.DataFrame({"timestamp": pd.to_datetime(["2026-01-01"])}))


class TestPoolSummary:
    """Tests for pool_summary function."""

    def test_spot_price_and_apr(self):
        pools = pd.DataFrame({
            "reserve0": [1000000.0, 45.8, 0.0],
            "reserve1": [1000000.0, 750.2, 10.0],
            "fees_24h": [6300.0, 9600.0, 0.0],
            "tvl_usd": [2000000.0, 3000800.0, 0.0],
        })
        result = pool_summary(pools)

        assert result["spot_price"].tolist()[0] == 1.0
        assert result["spot_price"].tolist()[1] == pytest.approx(750.2 / 45.8)
        assert result["spot_price"].tolist()[2] == 0.0
        assert result["apr"].tolist()[0] == pytest.approx(calculate_apr(6300, 2000000))
        assert result["apr"].tolist()[2] == 0.0

    def test_missing_columns(self):
        with pytest.raises(ValueError, match="tvl_usd"):
            pool_summary(pd.DataFrame({"reserve0": [1.0], "reserve1": [1.0], "fees_24h": [1.0]}))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
