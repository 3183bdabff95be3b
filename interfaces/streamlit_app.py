"""
Streamlit web interface for the strike finder.

Interactive UI with tabs for:
- Strangle rebalancer (delta-neutral balancing leg)
- Premium hedger (opposite option with the same LTP)
- Delta curve across strikes
"""

import streamlit as st
import numpy as np
import pandas as pd
import plotly.graph_objects as go

from strikefinder.core.black_scholes import delta, years_to_expiry
from strikefinder.diagnostics.sanity import check_rebalance
from strikefinder.strategies.premium_match import match_premium
from strikefinder.strategies.rebalance import rebalance
from strikefinder.utils.constants import (
    DEFAULT_DAYS_TO_EXPIRY,
    DEFAULT_RATE_PCT,
    DEFAULT_SPOT,
    DEFAULT_VOLATILITY_PCT,
)
from strikefinder.utils.types import LegToFind, MarketParameters, OptionLeg, OptionQuote

st.set_page_config(page_title="Strike Finder", layout="wide")

st.title("Strike Finder")
st.markdown("Black-Scholes strike solving for delta-neutral and premium-matched legs")

# Sidebar market data
st.sidebar.header("Market Data")
spot = st.sidebar.number_input("Spot Price", value=DEFAULT_SPOT, min_value=0.01)
days = st.sidebar.number_input("Days to Expiry", value=DEFAULT_DAYS_TO_EXPIRY, step=1)
vol_pct = st.sidebar.number_input("Volatility (%)", value=DEFAULT_VOLATILITY_PCT, min_value=0.01)
rate_pct = st.sidebar.number_input("Risk-Free Rate (%)", value=DEFAULT_RATE_PCT, step=0.1)

market = MarketParameters.from_percent(spot, days, vol_pct, rate_pct)

tab1, tab2, tab3 = st.tabs(["Strangle Rebalancer", "Premium Hedger", "Delta Curve"])

with tab1:
    st.header("Find the Balancing Leg")

    col1, col2 = st.columns(2)

    with col1:
        st.subheader("Existing Leg")
        existing_side = st.selectbox("Position Type", ["short", "long"], key="existing_side")
        existing_kind = st.selectbox("Option Type", ["call", "put"], key="existing_kind")
        existing_strike = st.number_input("Strike Price", value=850.0, min_value=0.01)
        quantity = st.number_input("Quantity (Lots)", value=1, min_value=1, step=1)

    with col2:
        st.subheader("Balancing Leg")
        find_side = st.selectbox("Position Type", ["short", "long"], key="find_side")
        find_kind = st.selectbox("Option Type", ["put", "call"], key="find_kind")

    if st.button("Calculate Balancing Leg"):
        try:
            result = rebalance(
                OptionLeg(existing_kind, existing_strike, int(quantity), existing_side),
                LegToFind(find_kind, find_side),
                market,
            )
        except ValueError as e:
            st.error(f"Error: {e}")
        else:
            st.session_state["rebalance_result"] = result

            c1, c2, c3 = st.columns(3)
            c1.metric("Existing Leg Delta", f"{result.existing_position_delta:.4f}")
            c2.metric("New Leg Delta", f"{result.new_position_delta:.4f}")
            c3.metric("Combined Net Delta", f"{result.net_delta:.4f}")

            st.success(f"Recommended Trade: {result.summary()}")

            check = check_rebalance(result)
            for violation in check.violations:
                st.warning(violation)

            st.table(pd.DataFrame([result.to_dict()]).T.rename(columns={0: "Value"}))

with tab2:
    st.header("Premium Hedger")
    st.markdown("Given an option's LTP, find the opposite option strike whose price matches it")

    col1, col2, col3 = st.columns(3)
    quote_kind = col1.selectbox("Input Leg Type", ["put", "call"])
    quote_strike = col2.number_input("Strike", value=770.0, min_value=0.01)
    quote_ltp = col3.number_input("LTP", value=6.5, min_value=0.0)

    if st.button("Find Opposite Option Strike with Same LTP"):
        try:
            match = match_premium(OptionQuote(quote_kind, quote_strike, quote_ltp), market)
        except ValueError as e:
            st.error(f"Error: {e}")
        else:
            st.metric(
                label=f"Matching {match.target_kind.value.upper()} Strike",
                value=f"{match.strike:g}",
            )
            st.info(f"Computed premium: {match.premium:.2f}")
            if not match.solve.converged:
                st.warning(match.solve.message)
            st.caption(
                "Based on Black-Scholes with your inputs. "
                "Real quotes may differ due to spreads and skew."
            )

with tab3:
    st.header("Delta vs Strike")

    T = years_to_expiry(market.days_to_expiry)
    strikes = np.linspace(spot * 0.7, spot * 1.5, 100)

    fig = go.Figure()
    for kind in ("call", "put"):
        deltas = [
            delta(spot, k, T, market.risk_free_rate, market.volatility, kind)
            for k in strikes
        ]
        fig.add_trace(go.Scatter(x=strikes, y=deltas, name=f"{kind.capitalize()} Delta"))
    fig.add_vline(x=spot, line_dash="dash", annotation_text="Spot")

    # Mark the legs from the last rebalance run on the rebalancer tab
    last = st.session_state.get("rebalance_result")
    if last is not None:
        fig.add_vline(
            x=last.existing_leg.strike,
            line_dash="dot",
            line_color="gray",
            annotation_text=f"Existing {last.existing_leg.kind.value}",
            annotation_position="bottom left",
        )
        fig.add_vline(
            x=last.new_leg.strike,
            line_color="green",
            annotation_text="Solved strike",
            annotation_position="bottom right",
        )
        fig.add_trace(
            go.Scatter(
                x=[last.new_leg.strike],
                y=[last.new_raw_delta],
                mode="markers",
                marker=dict(size=10, color="green"),
                name=f"Solved {last.new_leg.kind.value} delta",
            )
        )
    else:
        st.caption("Run the Strangle Rebalancer to mark its solved strike on this chart.")

    fig.update_layout(title="Delta vs Strike", xaxis_title="Strike", yaxis_title="Delta")
    st.plotly_chart(fig, use_container_width=True)
