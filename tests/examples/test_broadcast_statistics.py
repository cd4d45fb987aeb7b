# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import pytest

import examples.broadcast_statistics as bs


def test_broadcast_statistics_values():
    column_sums, row_means, overall_max = bs.run(verbose=False)
    assert column_sums == [2.0, 4.0, 8.0]
    assert row_means == pytest.approx([3.5 / 3] * 4)
    assert overall_max == 2.0


def test_broadcast_statistics_prints(capsys):
    bs.run(verbose=True)
    out = capsys.readouterr().out
    assert "column sums" in out
    assert "native storage: [[0.5, 1.0, 2.0]]" in out
