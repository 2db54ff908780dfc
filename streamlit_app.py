from __future__ import annotations

import streamlit as st
import pandas as pd
import altair as alt

from core.config import ScanCriteria, get_language, get_ticker_env, load_criteria
from core.errors import ConfigError
from core.market_signal import signal_diagnostics
from core.messages import format_recommendation
from core.models import TickerEvaluation
from core.scanner import scan
from core.tickers import get_default_tickers, parse_ticker_list
from integrations.alphavantage import AlphaVantageClient


st.set_page_config(page_title="Indicator Scanner", layout="wide")


def volume_chart(evaluation: TickerEvaluation) -> alt.Chart | None:
    volumes = evaluation.snapshot.volumes.series()
    if not volumes:
        return None

    # Newest first from the API; plot oldest to newest
    df_plot = pd.DataFrame({
        'Day': list(range(-len(volumes) + 1, 1)),
        'Volume': list(reversed(volumes)),
    })
    bars = alt.Chart(df_plot).mark_bar(color='#4e79a7').encode(
        x=alt.X('Day:O', title='Trading day (0 = latest)'),
        y=alt.Y('Volume:Q', title='Volume'),
        tooltip=[alt.Tooltip('Volume:Q', format=',.0f')],
    )
    if evaluation.volume_average is None:
        return bars.properties(height=220)

    avg_rule = alt.Chart(pd.DataFrame({'y': [evaluation.volume_average]})).mark_rule(
        color='#f28e2c', strokeDash=[6, 3]
    ).encode(y='y:Q')
    return alt.layer(bars, avg_rule).properties(height=220)


def sidebar_criteria(defaults: ScanCriteria) -> ScanCriteria:
    st.sidebar.header("Buy conditions")
    rsi_threshold = st.sidebar.number_input(
        "RSI threshold (buy at or below)", min_value=0.0, max_value=100.0,
        value=float(defaults.rsi_threshold), step=1.0)
    ema_period = st.sidebar.number_input(
        "EMA period", min_value=1, value=int(defaults.ema_period), step=1)
    sma_period = st.sidebar.number_input(
        "SMA period", min_value=1, value=int(defaults.sma_period), step=1)
    volume_window = st.sidebar.number_input(
        "Volume average window (days)", min_value=1, value=int(defaults.volume_window), step=1)
    include_latest = st.sidebar.checkbox(
        "Include latest day in volume average", value=defaults.volume_include_latest)
    return ScanCriteria(
        rsi_threshold=float(rsi_threshold),
        rsi_period=defaults.rsi_period,
        ema_period=int(ema_period),
        sma_period=int(sma_period),
        interval=defaults.interval,
        ma_series_type=defaults.ma_series_type,
        rsi_series_type=defaults.rsi_series_type,
        volume_window=int(volume_window),
        volume_include_latest=include_latest,
    )


st.title("📈 Indicator Scanner")
st.caption("First ticker with RSI at or below the threshold, EMA above SMA and a volume spike.")

try:
    default_criteria = load_criteria()
    client = AlphaVantageClient.from_env()
except ConfigError as e:
    st.error(f"❌ {e.message}")
    st.stop()

criteria = sidebar_criteria(default_criteria)
language = st.sidebar.selectbox(
    "Language", ['fi', 'en'], index=0 if get_language() == 'fi' else 1)

default_tickers = get_ticker_env() or ' '.join(get_default_tickers())
raw_tickers = st.text_input("Tickers (scanned in order)", value=default_tickers)
tickers = parse_ticker_list(raw_tickers)

if st.button("Run scan", type="primary", disabled=not tickers):
    with st.spinner(f"Scanning {len(tickers)} ticker(s)..."):
        result = scan(tickers, client, criteria)

    message = format_recommendation(result.recommendation, language)
    if result.recommendation.is_buy:
        st.success(message)
    else:
        st.info(message)

    for evaluation in result.evaluations:
        diag = signal_diagnostics(evaluation)
        status = "✅" if diag['all_ok'] else "❌"
        with st.expander(f"{status} {diag['symbol']}", expanded=diag['all_ok']):
            cols = st.columns(4)
            metrics = diag['metrics']
            cols[0].metric("RSI", f"{metrics['rsi']:.2f}" if metrics['rsi'] is not None else "n/a")
            cols[1].metric("EMA", f"{metrics['ema']:,.2f}" if metrics['ema'] is not None else "n/a")
            cols[2].metric("SMA", f"{metrics['sma']:,.2f}" if metrics['sma'] is not None else "n/a")
            cols[3].metric(
                "Latest volume",
                f"{metrics['latest_volume']:,.0f}" if metrics['latest_volume'] is not None else "n/a")

            st.dataframe(
                pd.DataFrame([diag['checks']]).rename(index={0: 'passed'}),
                use_container_width=True)
            for name, reason in diag['unavailable'].items():
                st.warning(f"{name}: {reason}")

            chart = volume_chart(evaluation)
            if chart is not None:
                st.altair_chart(chart, use_container_width=True)
