from itertools import accumulate

import pytest

from booker.application.intervals import interval_for_stage


@pytest.mark.parametrize("stage, days", [(0, 1), (1, 1), (2, 5), (3, 7), (4, 11)])
def test_interval_table(stage, days):
    assert interval_for_stage(stage) == days


@pytest.mark.parametrize("stage", [5, 6, 42, -1])
def test_terminal_and_out_of_range_stages(stage):
    assert interval_for_stage(stage) is None


def test_non_integer_stages_are_terminal():
    assert interval_for_stage(True) is None
    assert interval_for_stage("2") is None


def test_deltas_add_up_to_cumulative_schedule():
    deltas = [interval_for_stage(s) for s in range(5)]
    assert list(accumulate(deltas)) == [1, 2, 7, 14, 25]
