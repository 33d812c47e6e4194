import pytest

from latticeipc.scorer import ScorerConfig, SymbolScorer


def test_initial_score_is_zero():
    scorer = SymbolScorer()
    assert scorer.score(42, 0) == 0.0


def test_record_alert_bumps_score():
    scorer = SymbolScorer(ScorerConfig(alert_increment=0.2, half_life_ns=1e18))
    scorer.record_alert(1, 0)
    assert scorer.score(1, 0) == pytest.approx(0.2, abs=1e-9)
    scorer.record_alert(1, 0)
    assert scorer.score(1, 0) == pytest.approx(0.4, abs=1e-9)


def test_score_capped_at_one():
    scorer = SymbolScorer(ScorerConfig(alert_increment=0.3, half_life_ns=1e18))
    for _ in range(10):
        scorer.record_alert(5, 0)
    assert scorer.score(5, 0) <= 1.0
    assert scorer.score(5, 0) == pytest.approx(1.0, abs=1e-9)


def test_score_decays_over_time():
    scorer = SymbolScorer(ScorerConfig(alert_increment=0.4, half_life_ns=1_000_000_000))
    scorer.record_alert(1, 0)
    assert scorer.score(1, 0) == pytest.approx(0.4, abs=1e-9)
    assert scorer.score(1, 1_000_000_000) == pytest.approx(0.2, abs=1e-6)
    assert scorer.score(1, 2_000_000_000) == pytest.approx(0.1, abs=1e-6)


def test_different_symbols_independent():
    scorer = SymbolScorer(ScorerConfig(alert_increment=0.5, half_life_ns=1e18))
    scorer.record_alert(1, 0)
    scorer.record_alert(1, 0)
    assert scorer.score(1, 0) == pytest.approx(1.0, abs=1e-9)
    assert scorer.score(2, 0) == 0.0


def test_reset():
    scorer = SymbolScorer(ScorerConfig(alert_increment=0.3, half_life_ns=1e18))
    scorer.record_alert(7, 0)
    scorer.record_alert(7, 0)
    scorer.reset()
    assert scorer.score(7, 0) == 0.0


def test_score_query_does_not_change_later_results():
    scorer = SymbolScorer(ScorerConfig(alert_increment=0.4, half_life_ns=1_000_000_000))
    scorer.record_alert(3, 0)
    first = scorer.score(3, 2_000_000_000)
    scorer.score(3, 1_000_000_000)
    assert scorer.score(3, 2_000_000_000) == pytest.approx(first)


def test_full_table_drops_new_symbols():
    scorer = SymbolScorer(ScorerConfig(max_symbols=2, alert_increment=0.5, half_life_ns=1e18))
    scorer.record_alert(1, 0)
    scorer.record_alert(2, 0)
    scorer.record_alert(3, 0)
    assert scorer.score(3, 0) == 0.0
    assert scorer.score(1, 0) == pytest.approx(0.5)


@pytest.mark.parametrize("max_symbols", [0, 3, 100])
def test_max_symbols_must_be_power_of_two(max_symbols):
    with pytest.raises(ValueError):
        SymbolScorer(ScorerConfig(max_symbols=max_symbols))


def test_half_life_must_be_positive():
    with pytest.raises(ValueError):
        SymbolScorer(ScorerConfig(half_life_ns=0))