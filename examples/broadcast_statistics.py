# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Column statistics over a broadcast view.

A single row of per-feature weights is expanded to the height of a small
table without copying, then reduced along each dimension. The same row is
read back after ``unexpand`` to show the storage never changed.
"""

from __future__ import annotations

import operator

import stridetensor as st


def run(verbose: bool = True):
    """Compute per-column and per-row statistics of a broadcast table.

    Returns
    -------
    tuple[list, list, float]
        Column sums, row means and the overall maximum of the expanded table.
    """

    weights = st.Tensor([1, 3], [0.5, 1.0, 2.0], dtype="float64")
    weights.expand(4, 3)

    column_sums = weights.reduce_dim(0, False, operator.add).tolist()
    row_means = weights.mean(dim=1).tolist()
    overall_max = weights.max().item()

    if verbose:
        print(f"expanded view:  {weights.to_nested_arrays()}")
        print(f"column sums:    {column_sums}")
        print(f"row means:      {row_means}")
        print(f"overall max:    {overall_max}")

    weights.unexpand()
    if verbose:
        print(f"native storage: {weights.to_nested_arrays()}")

    return column_sums, row_means, overall_max


if __name__ == "__main__":
    run()
