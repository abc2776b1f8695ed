# dense_ad/core/graph_utils.py
"""
Summaries of differentiated values and tensor towers, for printing and
inspection while debugging a derivative computation.
"""
from collections import Counter
from typing import Any, Dict

import numpy as np

from .container import Layout, fold
from .dense import Dense, Lift, Mode, Zero
from .tensors import Tensors


def _kind(x: Any) -> str:
    if isinstance(x, Dense):
        return "Dense"
    if isinstance(x, Lift):
        return "Lift"
    if isinstance(x, Zero):
        return "Zero"
    return "constant"


def _flat_values(values: Any) -> list:
    if isinstance(values, (list, tuple, dict, np.ndarray)):
        return Layout.of(values).flatten(values)
    return [values]


def get_value_stats(values: Any) -> Dict:
    """
    Statistics (no printing) over a value or a container of values.

    Returns
    -------
    dict with the number of values, a count per representation kind, the
    tangent lengths seen, and the number of non-zero partials.
    """
    flat = _flat_values(values)
    kinds = Counter(_kind(x) for x in flat)
    tangents = [x.tangent for x in flat if isinstance(x, Dense)]
    arities = sorted({len(t) for t in tangents})
    nonzero = sum(fold(lambda acc, d: acc + (1 if d != 0 else 0), 0, t) for t in tangents)
    return {
        'values': len(flat),
        'kinds': dict(kinds),
        'arities': arities,
        'nonzero_partials': nonzero,
        'levels': sorted({x.tag for x in flat if isinstance(x, Mode)}),
    }


def print_value_summary(values: Any, detailed: bool = False) -> Dict:
    """
    Print a summary of a value or container of values.

    Args:
        values: Mode value, plain number, or list/tuple/dict/ndarray of them
        detailed: also print one line per value (first 100 only)

    Returns:
        The dictionary from get_value_stats()
    """
    stats = get_value_stats(values)

    print("\n" + "="*70)
    print("DENSE VALUE SUMMARY")
    print("="*70)
    print(f"Total values:       {stats['values']:,}")
    print(f"Tangent lengths:    {stats['arities']}")
    print(f"Non-zero partials:  {stats['nonzero_partials']:,}")
    print(f"Levels (tags):      {stats['levels']}")
    print()
    print("Representation breakdown:")
    for kind, count in Counter(stats['kinds']).most_common():
        pct = 100.0 * count / stats['values']
        print(f"  {kind:10s}: {count:6,} ({pct:5.1f}%)")

    if detailed:
        print()
        for i, x in enumerate(_flat_values(values)[:100]):
            print(f"  [{i:3d}] {_kind(x):8s} {x!r}")

    print("="*70 + "\n")
    return stats


def print_tower_summary(tower: Tensors, depth: int = 3) -> Dict:
    """
    Print shape and magnitude of the first `depth` ranks of a tensor tower.
    Forces exactly those ranks.

    Returns:
        {'ranks': [{'rank', 'shape', 'max_abs'}, ...]}
    """
    rows = []
    for rank, head in enumerate(tower.take(depth)):
        arr = np.asarray(head, dtype=float)
        max_abs = float(np.max(np.abs(arr))) if arr.size else 0.0
        rows.append({'rank': rank, 'shape': arr.shape, 'max_abs': max_abs})

    print("\n" + "="*70)
    print("TENSOR TOWER SUMMARY")
    print("="*70)
    for row in rows:
        print(f"Rank {row['rank']:2d}: shape {str(row['shape']):16s} max|entry| {row['max_abs']:.6g}")
    print("="*70 + "\n")
    return {'ranks': rows}
