'''
This file contains the time series longest common subsequence (LCSS) similarity
between two one dimensional series x, y. Two samples match when they are at most
`delta` positions apart in time and at most `epsilon` apart in value.

Published work using this measure should cite:
M. Vlachos, M. Hadjieleftheriou, D. Gunopulos, E. Keogh,
"Indexing Multi-Dimensional Time-Series with Support for Multiple Distance Measures",
Proc. of 9th SIGKDD, Washington, DC, 2003.
'''
import math
from numbers import Integral, Real
from typing import Sequence, Tuple, Union

import numpy as np
import pandas as pd

SeriesLike = Union[Sequence[float], np.ndarray, pd.Series]


class InvalidArgumentError(ValueError):
    """Raised when a series or a tolerance cannot be used for matching."""


InvalidArgument = InvalidArgumentError


def _as_series(x: SeriesLike, name: str) -> np.ndarray:
    if isinstance(x, pd.Series):
        x = x.to_numpy()
    try:
        arr = np.asarray(x, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"{name} must be a numeric sequence: {e}") from e
    if arr.ndim != 1:
        raise InvalidArgumentError(f"{name} must be one dimensional, got shape {arr.shape}")
    if arr.size == 0:
        raise InvalidArgumentError(f"{name} must not be empty")
    return arr


def _check_tolerances(delta: int, epsilon: float) -> None:
    if isinstance(delta, bool) or not isinstance(delta, Integral):
        raise InvalidArgumentError(f"delta must be an integer, got {delta!r}")
    if delta < 0:
        raise InvalidArgumentError(f"delta must be >= 0, got {delta}")
    if isinstance(epsilon, bool) or not isinstance(epsilon, Real) or not math.isfinite(epsilon):
        raise InvalidArgumentError(f"epsilon must be a finite real number, got {epsilon!r}")
    if epsilon < 0:
        raise InvalidArgumentError(f"epsilon must be >= 0, got {epsilon}")


def _band(i: int, delta: int, n: int, legacy_band: bool) -> range:
    # columns of row i that get visited, clamped to [0, n - 1]
    if legacy_band:
        lo, hi = i - delta - 1, i + delta - 1
    else:
        lo, hi = i - delta, i + delta
    return range(max(lo, 0), min(hi, n - 1) + 1)


def _build_table(
    x: SeriesLike, y: SeriesLike, delta: int, epsilon: float, legacy_band: bool
) -> Tuple[np.ndarray, int, int]:
    _check_tolerances(delta, epsilon)
    a = _as_series(x, "x")
    b = _as_series(y, "y")

    # put the shorter first
    if len(b) < len(a):
        a, b = b, a
    m, n = len(a), len(b)

    table = np.zeros((m + 1, n + 1))
    for i in range(m):
        for j in _band(i, delta, n, legacy_band):
            if abs(a[i] - b[j]) <= epsilon:
                table[i + 1, j + 1] = table[i, j] + 1
            else:
                table[i + 1, j + 1] = max(table[i, j + 1], table[i + 1, j])
    return table, m, n


def lcss_table(
    x: SeriesLike, y: SeriesLike, delta: int, epsilon: float, legacy_band: bool = False
) -> np.ndarray:
    """
    Builds the banded LCSS table for x and y.

    Rows belong to the shorter series (x on ties) and columns to the longer one;
    row 0 and column 0 hold the initial conditions. Cells outside the band of
    width `delta` around the diagonal are never visited and stay 0.

    Args:
        x, y: One dimensional numeric series.
        delta: Time matching region (left & right), in samples.
        epsilon: Spatial matching region (up & down).
        legacy_band: Use the lagged band [i - delta - 1, i + delta - 1] of the
            reference formulation instead of the centered [i - delta, i + delta].

    Returns:
        Array of shape (min(len) + 1, max(len) + 1).
    """
    table, _, _ = _build_table(x, y, delta, epsilon, legacy_band)
    return table


def lcss_similarity(
    x: SeriesLike,
    y: SeriesLike,
    delta: int,
    epsilon: float,
    transpose: int = 0,
    legacy_band: bool = False,
) -> float:
    """
    Time series matching using the longest common subsequence within a region
    of delta and epsilon.

    Args:
        x: One time series.
        y: The second time series, may be shorter or longer than x.
        delta: Time matching region (left & right), in samples. Must be >= 0.
        epsilon: Spatial matching region (up & down). Must be >= 0.
        transpose: Vertical shift used when plotting the matched series. It has
            no effect on the score.
        legacy_band: See `lcss_table`.

    Returns:
        Similarity in [0, 1]: number of matched samples over the length of the
        longer series.

    Raises:
        InvalidArgumentError: On a negative tolerance or an empty series.
    """
    table, m, n = _build_table(x, y, delta, epsilon, legacy_band)
    # best match count after consuming the whole shorter series, at any offset
    lcs = table[m].max()
    return float(lcs / n)


match = lcss_similarity


def lcss_distance(
    x: SeriesLike,
    y: SeriesLike,
    delta: int,
    epsilon: float,
    transpose: int = 0,
    legacy_band: bool = False,
) -> float:
    return 1.0 - lcss_similarity(x, y, delta, epsilon, transpose, legacy_band)


class Matcher:
    """
    Stateless LCSS matcher. Each call builds and discards its own table, so one
    instance can be shared between threads.
    """

    def match(
        self,
        series_a: SeriesLike,
        series_b: SeriesLike,
        delta: int,
        epsilon: float,
        transpose: int = 0,
        legacy_band: bool = False,
    ) -> float:
        return lcss_similarity(series_a, series_b, delta, epsilon, transpose, legacy_band)

    def distance(
        self,
        series_a: SeriesLike,
        series_b: SeriesLike,
        delta: int,
        epsilon: float,
        transpose: int = 0,
        legacy_band: bool = False,
    ) -> float:
        return lcss_distance(series_a, series_b, delta, epsilon, transpose, legacy_band)
