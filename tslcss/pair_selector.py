import itertools
from numbers import Integral
from typing import Optional

import numpy as np
import pandas as pd

from .temporal_distances import InvalidArgumentError, lcss_similarity

DEFAULT_CONFIG = {
    "LCSS_DELTA": 5,  # time matching region, in samples
    "LCSS_EPSILON": 0.01,  # spatial matching region, in (normalized) price units
    "LCSS_LEGACY_BAND": False,
    "NORMALIZE": True,  # divide each column by its first valid value
    "n_pairs": 10,  # number of pairs returned by form_pairs
}


class PairSelector:
    def __init__(self, config: Optional[dict] = None, verbose: bool = False):
        """
        Ranks column pairs of a price frame by LCSS similarity.

        Args:
            config (dict): Overrides for DEFAULT_CONFIG.
            verbose (bool): Whether or not to print a summary of each ranking.
        """
        self.config = {**DEFAULT_CONFIG, **(config or {})}
        self.verbose = verbose

    def _prepare(self, prices: pd.DataFrame) -> pd.DataFrame:
        if prices.shape[1] < 2:
            raise InvalidArgumentError(
                f"Need at least two columns to form pairs, got {prices.shape[1]}"
            )
        if not self.config.get("NORMALIZE", True):
            return prices
        first_valid = prices.bfill().iloc[0]
        zero = list(first_valid.index[first_valid == 0])
        if zero:
            raise InvalidArgumentError(
                f"Cannot normalize columns whose first price is 0: {zero}. Set NORMALIZE to False."
            )
        return prices / first_valid

    def _similarity(self, s1: pd.Series, s2: pd.Series) -> float:
        return lcss_similarity(
            s1.dropna(),
            s2.dropna(),
            delta=self.config["LCSS_DELTA"],
            epsilon=self.config["LCSS_EPSILON"],
            legacy_band=self.config.get("LCSS_LEGACY_BAND", False),
        )

    def form_pairs(self, prices: pd.DataFrame) -> pd.DataFrame:
        """
        Computes the LCSS similarity between all pairs of columns and returns the
        top `n_pairs` pairs with the lowest distance (1 - similarity).

        Args:
            prices: Prices with dates as index and tickers as columns. With
                NORMALIZE on, a column whose first valid price is 0 is rejected.

        Returns:
            Dataframe with columns stock1, stock2, similarity, distance.
        """
        num_pairs = self.config["n_pairs"]
        if isinstance(num_pairs, bool) or not isinstance(num_pairs, Integral) or num_pairs < 0:
            raise InvalidArgumentError(f"n_pairs must be a non-negative integer, got {num_pairs!r}")
        normalized = self._prepare(prices)

        rows = []
        for stock_1, stock_2 in itertools.combinations(normalized.columns, 2):
            similarity = self._similarity(normalized[stock_1], normalized[stock_2])
            rows.append({
                'stock1': stock_1,
                'stock2': stock_2,
                'similarity': similarity,
                'distance': 1.0 - similarity,
            })

        pairs_df_full = pd.DataFrame(rows)
        pairs_df_full = pairs_df_full.sort_values(by='distance', kind='stable').reset_index(drop=True)
        pairs_df = pairs_df_full.head(num_pairs)

        if self.verbose:
            print(f"Pairs scored: {len(pairs_df_full)}")
            if not pairs_df.empty:
                top = pairs_df.iloc[0]
                print(f"Top pair: {top['stock1']} / {top['stock2']} (similarity {top['similarity']:.4f})")
        return pairs_df

    def similarity_matrix(self, prices: pd.DataFrame) -> pd.DataFrame:
        """
        Symmetric matrix of pairwise LCSS similarities, with 1.0 on the diagonal.
        """
        normalized = self._prepare(prices)
        cols = normalized.columns
        out = pd.DataFrame(np.eye(len(cols)), index=cols, columns=cols)
        for stock_1, stock_2 in itertools.combinations(cols, 2):
            s = self._similarity(normalized[stock_1], normalized[stock_2])
            out.loc[stock_1, stock_2] = s
            out.loc[stock_2, stock_1] = s
        return out
