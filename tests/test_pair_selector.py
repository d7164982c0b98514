"""
Tests for LCSS pair selection over price frames.
"""

import numpy as np
import pandas as pd
import pytest

from tslcss import DEFAULT_CONFIG, InvalidArgumentError, PairSelector, pair_to_rank_map


@pytest.fixture
def prices():
    base = np.array([1.0, 2.0, 3.0, 4.0, 5.0])
    return pd.DataFrame({
        'a': base,
        'b': base * 2,  # same shape once normalized
        'c': np.array([1.0, 5.0, 1.0, 5.0, 1.0]),
    })


class TestFormPairs:
    """Ranking column pairs by LCSS distance."""

    def test_best_pair_first(self, prices):
        pairs = PairSelector({"n_pairs": 2}).form_pairs(prices)

        assert list(pairs.columns) == ['stock1', 'stock2', 'similarity', 'distance']
        assert len(pairs) == 2
        assert (pairs.loc[0, 'stock1'], pairs.loc[0, 'stock2']) == ('a', 'b')
        assert pairs.loc[0, 'similarity'] == 1.0
        assert pairs['distance'].is_monotonic_increasing

    def test_distance_complements_similarity(self, prices):
        pairs = PairSelector().form_pairs(prices)
        np.testing.assert_allclose(pairs['similarity'] + pairs['distance'], 1.0)

    def test_without_normalization(self, prices):
        pairs = PairSelector({"NORMALIZE": False}).form_pairs(prices)
        ab = pairs[(pairs['stock1'] == 'a') & (pairs['stock2'] == 'b')]
        assert ab['similarity'].iloc[0] < 1.0

    def test_missing_values_dropped(self):
        df = pd.DataFrame({
            'x': [np.nan, 1.0, 2.0, 3.0],
            'y': [2.0, 4.0, 6.0, 8.0],
        })
        pairs = PairSelector().form_pairs(df)
        assert pairs.loc[0, 'similarity'] == pytest.approx(0.75)

    def test_single_column_rejected(self):
        with pytest.raises(InvalidArgumentError):
            PairSelector().form_pairs(pd.DataFrame({'a': [1.0, 2.0]}))

    def test_bad_tolerance_from_config(self, prices):
        with pytest.raises(InvalidArgumentError, match="delta"):
            PairSelector({"LCSS_DELTA": -1}).form_pairs(prices)

    def test_verbose_output(self, prices, capsys):
        PairSelector(verbose=True).form_pairs(prices)
        out = capsys.readouterr().out
        assert "Pairs scored: 3" in out
        assert "Top pair: a / b" in out

    def test_verbose_with_no_pairs_kept(self, capsys):
        """Zero requested pairs returns an empty frame instead of failing."""
        df = pd.DataFrame({'a': [1.0, 2.0], 'b': [1.0, 2.0]})
        pairs = PairSelector({"n_pairs": 0}, verbose=True).form_pairs(df)

        assert pairs.empty
        out = capsys.readouterr().out
        assert "Pairs scored: 1" in out
        assert "Top pair" not in out

    @pytest.mark.parametrize("n_pairs", [-1, 1.5, True])
    def test_bad_n_pairs_rejected(self, prices, n_pairs):
        with pytest.raises(InvalidArgumentError, match="n_pairs"):
            PairSelector({"n_pairs": n_pairs}).form_pairs(prices)

    def test_zero_first_price_rejected(self):
        df = pd.DataFrame({'a': [0.0, 1.0, 2.0], 'b': [0.0, 1.0, 2.0]})
        with pytest.raises(InvalidArgumentError, match="first price is 0"):
            PairSelector().form_pairs(df)

    def test_zero_first_price_without_normalization(self):
        df = pd.DataFrame({'a': [0.0, 1.0, 2.0], 'b': [0.0, 1.0, 2.0]})
        pairs = PairSelector({"NORMALIZE": False}).form_pairs(df)
        assert pairs.loc[0, 'similarity'] == 1.0

    def test_config_defaults_kept(self):
        selector = PairSelector({"LCSS_EPSILON": 0.5})
        assert selector.config["LCSS_EPSILON"] == 0.5
        assert selector.config["LCSS_DELTA"] == DEFAULT_CONFIG["LCSS_DELTA"]


class TestSimilarityMatrix:
    """Pairwise similarity matrix."""

    def test_symmetric_with_unit_diagonal(self, prices):
        sim = PairSelector().similarity_matrix(prices)

        assert list(sim.index) == ['a', 'b', 'c']
        np.testing.assert_allclose(np.diag(sim.values), 1.0)
        np.testing.assert_allclose(sim.values, sim.values.T)
        assert sim.loc['a', 'b'] == 1.0
        assert 0.0 <= sim.loc['a', 'c'] < 1.0


class TestRankMap:
    """Rank lookup for ranked pairs."""

    def test_from_frame(self, prices):
        ranks = pair_to_rank_map(PairSelector().form_pairs(prices))
        assert ranks[('a', 'b')] == 0
        assert sorted(ranks.values()) == [0, 1, 2]

    def test_from_tuples(self):
        ranks = pair_to_rank_map([('x', 'y', 0.1), ('x', 'z', 0.4)])
        assert ranks == {('x', 'y'): 0, ('x', 'z'): 1}
