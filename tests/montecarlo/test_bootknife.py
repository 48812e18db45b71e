"""
Tests for bootknife resampling.

One item is left out of every column: systematically (column b leaves
out item b mod n) while a complete pass of n columns remains, at random
in the trailing partial pass. Balance still holds over the whole matrix.
"""

import numpy as np
import pytest
from scipy import stats

from pybootknife.montecarlo import ResampleGenerator, ResampleMode, resample


# ---------------------------------------------------------------------------
# Tests: Exclusion schedule
# ---------------------------------------------------------------------------

class TestExclusionSchedule:

    def test_three_items_twenty_resamples(self):
        sol = resample(3, 20, mode="bootknife", seed=1)
        assert sol.mode is ResampleMode.BOOTKNIFE

        # 20 // 3 = 6 complete passes: systematic round-robin.
        np.testing.assert_array_equal(sol.excluded[:18], np.tile([0, 1, 2], 6))
        np.testing.assert_array_equal(
            np.bincount(sol.excluded[:18], minlength=3), [6, 6, 6]
        )
        # Remaining 2 columns: random exclusions.
        assert np.all((sol.excluded[18:] >= 0) & (sol.excluded[18:] < 3))

        np.testing.assert_array_equal(sol.frequencies, [20, 20, 20])

    def test_each_block_excludes_every_item_once(self):
        n, nboot = 5, 23
        sol = resample(n, nboot, mode="bootknife", seed=8)
        for start in range(0, (nboot // n) * n, n):
            block = np.sort(sol.excluded[start:start + n])
            np.testing.assert_array_equal(block, np.arange(n))

    def test_exact_multiple_is_fully_systematic(self, fixed_generator):
        # 8 columns x 4 uniforms each; no extra draws for exclusions.
        gen = fixed_generator([0.5] * 32)
        sol = resample(4, 8, mode="bootknife", generator=gen)
        np.testing.assert_array_equal(sol.excluded, [0, 1, 2, 3, 0, 1, 2, 3])

    def test_fewer_resamples_than_items_is_random(self):
        sol = resample(6, 4, mode="bootknife", seed=5)
        assert sol.excluded.shape == (4,)
        assert np.all((sol.excluded >= 0) & (sol.excluded < 6))
        np.testing.assert_array_equal(sol.frequencies, np.full(6, 4))

    def test_random_exclusion_uses_draw_after_column_uniforms(self, fixed_generator):
        # n=2, nboot=1: two row uniforms, then the exclusion draw.
        gen = fixed_generator([0.9, 0.9, 0.2])
        sol = resample(2, 1, mode="bootknife", generator=gen)
        assert sol.excluded[0] == 0

    def test_random_exclusions_are_uniform(self):
        gen = ResampleGenerator(seed=2024)
        draws = []
        for _ in range(600):
            # 5 // 3 = 1 pass: columns 4 and 5 exclude at random.
            sol = resample(3, 5, mode="bootknife", generator=gen)
            draws.extend(sol.excluded[3:].tolist())
        counts = np.bincount(draws, minlength=3)
        assert counts.sum() == 1200
        assert stats.chisquare(counts).pvalue > 1e-4


# ---------------------------------------------------------------------------
# Tests: Exclusion law and balance
# ---------------------------------------------------------------------------

class TestExclusionLaw:

    @pytest.mark.parametrize("n, nboot, seed", [
        (3, 20, 1), (5, 50, 2), (8, 13, 3), (10, 200, 4),
    ])
    def test_excluded_item_absent_from_its_column(self, n, nboot, seed):
        sol = resample(n, nboot, mode="bootknife", seed=seed)
        for b in range(nboot):
            if not sol.fallback[b]:
                assert sol.excluded[b] not in sol.indices[:, b]

    @pytest.mark.parametrize("n, nboot, seed", [
        (3, 20, 1), (5, 50, 2), (8, 13, 3), (10, 200, 4),
    ])
    def test_balance_holds(self, n, nboot, seed):
        sol = resample(n, nboot, mode="bootknife", seed=seed)
        np.testing.assert_array_equal(sol.frequencies, np.full(n, nboot))

    def test_weighted_bootknife_balance(self):
        weights = [10, 30, 0, 20]
        sol = resample(4, 15, mode="bootknife", weights=weights, seed=6)
        np.testing.assert_array_equal(sol.frequencies, weights)

    def test_data_mode_bootknife(self):
        x = np.array([23.0, 44.0, 36.0])
        sol = resample(x, 9, mode="bootknife", seed=3)
        np.testing.assert_array_equal(sol.bootsam, x[sol.indices])
        for value in x:
            assert np.sum(sol.bootsam == value) == 9


# ---------------------------------------------------------------------------
# Tests: Exhaustion fallback
# ---------------------------------------------------------------------------

class TestExhaustionFallback:
    """When the excluded item is all that is left, it is drawn anyway."""

    def test_fallback_when_only_excluded_item_remains(self):
        # Column 1 excludes item 1, which holds every unit.
        sol = resample(2, 2, mode="bootknife", weights=[4, 0], seed=1)
        np.testing.assert_array_equal(sol.bootsam, np.ones((2, 2)))
        np.testing.assert_array_equal(sol.excluded, [0, 1])
        np.testing.assert_array_equal(sol.fallback, [True, False])
        assert sol.info["n_fallback_columns"] == 1
        assert any("exhausted" in w for w in sol.warnings)
        np.testing.assert_array_equal(sol.frequencies, [4, 0])

    def test_fallback_applies_per_draw(self, fixed_generator):
        # u = [0, 0], exclusion draw 0.6 -> item 2 excluded.
        # Row 1 takes item 1; row 2 finds only item 2 left and takes it.
        gen = fixed_generator([0.0, 0.0, 0.6])
        sol = resample(2, 1, mode="bootknife", generator=gen)
        np.testing.assert_array_equal(sol.bootsam[:, 0], [1, 2])
        np.testing.assert_array_equal(sol.excluded, [1])
        np.testing.assert_array_equal(sol.fallback, [True])

    def test_fallback_on_last_row(self, fixed_generator):
        # Item 1 excluded; row 1 takes the single unit of item 2, so
        # row 2 can only draw the excluded item.
        gen = fixed_generator([0.0, 0.0, 0.2])
        sol = resample(2, 1, mode="bootknife", generator=gen)
        np.testing.assert_array_equal(sol.bootsam[:, 0], [2, 1])
        np.testing.assert_array_equal(sol.fallback, [True])
