from typing import Dict, Hashable, Iterable, Tuple, Union

import pandas as pd


def pair_to_rank_map(
    ranked: Union[pd.DataFrame, Iterable[Tuple[Hashable, Hashable, float]]]
) -> Dict[Tuple[Hashable, Hashable], int]:
    """
    Converts a ranked list of pairs into a dictionary mapping each (A, B) pair
    to its rank index.

    Args:
        ranked: Either the output of PairSelector.form_pairs, or a list of
            (asset A, asset B, score) tuples sorted from best to worst.

    Returns:
        A mapping from each (A, B) pair to its 0-based position in the ranking.
    """
    if isinstance(ranked, pd.DataFrame):
        ranked = zip(ranked['stock1'], ranked['stock2'], ranked['distance'])
    return {(a, b): i for i, (a, b, _) in enumerate(ranked)}
