"""
Scanner Unit Tests

First-match scan over the ticker list.
"""

from conftest import BUY, FLAT_VOLUMES, FakeResponse, FakeSession
from core.config import ScanCriteria
from core.market_signal import signal_diagnostics
from core.models import NO_OPPORTUNITY
from core.scanner import evaluate_ticker, give_purchase_recommendation, scan
from integrations.alphavantage.client import AlphaVantageClient

RSI_FAIL = dict(BUY, RSI=70.0)
CROSS_FAIL = dict(BUY, EMA=90.0)
VOLUME_FAIL = dict(BUY, volumes=FLAT_VOLUMES)


class TestEvaluateTicker:
    """Test evaluate_ticker"""

    def test_all_conditions_met(self, client: AlphaVantageClient, session: FakeSession) -> None:
        session.market['TSLA'] = BUY
        evaluation = evaluate_ticker(client, 'TSLA')

        assert evaluation.all_ok
        assert evaluation.volume_average == 120.0

    def test_each_condition_required(self, client: AlphaVantageClient, session: FakeSession) -> None:
        """No partial credit: any single failure disqualifies"""
        session.market.update({'R': RSI_FAIL, 'C': CROSS_FAIL, 'V': VOLUME_FAIL})

        r = evaluate_ticker(client, 'R')
        c = evaluate_ticker(client, 'C')
        v = evaluate_ticker(client, 'V')

        assert (r.rsi_ok, r.golden_cross_ok, r.volume_ok) == (False, True, True)
        assert (c.rsi_ok, c.golden_cross_ok, c.volume_ok) == (True, False, True)
        assert (v.rsi_ok, v.golden_cross_ok, v.volume_ok) == (True, True, False)
        assert not any(e.all_ok for e in (r, c, v))

    def test_threshold_is_configurable(self, client: AlphaVantageClient, session: FakeSession) -> None:
        session.market['TSLA'] = dict(BUY, RSI=55.0)

        assert not evaluate_ticker(client, 'TSLA', ScanCriteria(rsi_threshold=42.0)).all_ok
        assert evaluate_ticker(client, 'TSLA', ScanCriteria(rsi_threshold=60.0)).all_ok

    def test_diagnostics(self, client: AlphaVantageClient, session: FakeSession) -> None:
        session.market['TSLA'] = RSI_FAIL
        diag = signal_diagnostics(evaluate_ticker(client, 'TSLA'))

        assert diag['symbol'] == 'TSLA'
        assert diag['all_ok'] is False
        assert diag['checks']['rsi_below_threshold'] is False
        assert diag['metrics']['rsi'] == 70.0
        assert diag['unavailable'] == {}


class TestScan:
    """Test scan"""

    def test_single_qualifying_ticker(self, client: AlphaVantageClient, session: FakeSession) -> None:
        session.market['TSLA'] = BUY
        result = scan(['TSLA'], client)

        assert result.recommendation.is_buy
        assert result.recommendation.ticker == 'TSLA'
        assert result.state == 'found'

    def test_second_ticker_recommended_when_first_fails_rsi(
            self, client: AlphaVantageClient, session: FakeSession) -> None:
        session.market.update({'A': RSI_FAIL, 'B': BUY})
        result = scan(['A', 'B'], client)

        assert result.recommendation.ticker == 'B'
        assert [e.symbol for e in result.evaluations] == ['A', 'B']

    def test_first_qualifying_ticker_wins(self, client: AlphaVantageClient, session: FakeSession) -> None:
        """Stops at the first match; later tickers are never fetched"""
        session.market.update({'A': VOLUME_FAIL, 'B': BUY, 'C': BUY})
        result = scan(['A', 'B', 'C'], client)

        assert result.recommendation.ticker == 'B'
        assert session.symbols_requested == ['A', 'B']

    def test_empty_list_fetches_nothing(self, client: AlphaVantageClient, session: FakeSession) -> None:
        result = scan([], client)

        assert result.recommendation == NO_OPPORTUNITY
        assert result.state == 'exhausted'
        assert session.calls == []

    def test_no_ticker_qualifies(self, client: AlphaVantageClient, session: FakeSession) -> None:
        session.market.update({'A': RSI_FAIL, 'B': CROSS_FAIL})
        result = scan(['A', 'B'], client)

        assert result.recommendation is NO_OPPORTUNITY
        assert len(result.evaluations) == 2

    def test_missing_field_disqualifies_without_crash(
            self, client: AlphaVantageClient, session: FakeSession) -> None:
        """A response missing the SMA block excludes A; B is still scanned"""
        session.market['A'] = {k: v for k, v in BUY.items() if k != 'SMA'}
        session.market['B'] = BUY
        result = scan(['A', 'B'], client)

        assert result.recommendation.ticker == 'B'
        first = result.evaluations[0]
        assert not first.golden_cross_ok
        assert 'sma' in first.snapshot.unavailable()

    def test_rate_limited_ticker_is_skipped(self, client: AlphaVantageClient, session: FakeSession) -> None:
        session.market.update({'A': BUY, 'B': BUY})
        session.overrides[('RSI', 'A')] = FakeResponse({'Information': 'rate limit reached'})
        result = scan(['A', 'B'], client)

        assert result.recommendation.ticker == 'B'

    def test_blank_tickers_skipped(self, client: AlphaVantageClient, session: FakeSession) -> None:
        session.market['B'] = BUY
        result = scan(['', 'B'], client)

        assert result.recommendation.ticker == 'B'
        assert session.symbols_requested == ['B']

    def test_whitespace_tickers_skipped(self, client: AlphaVantageClient, session: FakeSession) -> None:
        session.market['B'] = BUY
        result = scan(['  ', '\t', 'B'], client)

        assert result.recommendation.ticker == 'B'
        assert session.symbols_requested == ['B']


class TestGivePurchaseRecommendation:
    """Test the one-line output"""

    def test_buy_message_finnish(self, client: AlphaVantageClient, session: FakeSession) -> None:
        session.market['TSLA'] = BUY
        assert give_purchase_recommendation(['TSLA'], client) == 'Osta TSLA tänään!'

    def test_no_opportunity_finnish(self, client: AlphaVantageClient, session: FakeSession) -> None:
        session.market['TSLA'] = RSI_FAIL
        assert give_purchase_recommendation(['TSLA'], client) == \
            'Istu käsien päällä, tänään ei mitään ostettavaa!'

    def test_buy_message_english(self, client: AlphaVantageClient, session: FakeSession) -> None:
        session.market['TSLA'] = BUY
        message = give_purchase_recommendation(['TSLA'], client, language='en')
        assert message == 'Buy TSLA today!'
