"""
pybootknife balanced resampling.

Balanced bootstrap and bootknife resample matrices, plus thin consumers
that bootstrap a statistic over them.

Usage:
    from pybootknife.montecarlo import resample, boot, boot_two_sample

    # 3 x 20 index matrix, each index appearing exactly 20 times
    sol = resample(3, 20, mode="bootknife", seed=1)
    sol.bootsam

    # Bootstrap a statistic over bootknife resamples
    result = boot(residuals, estimator, nboot=2000, seed=42)

    # Distribution of mean(x) - mean(y)
    result = boot_two_sample(x, y, np.mean, nboot=2000, seed=42)
"""

from pybootknife.montecarlo._common import ResampleMode
from pybootknife.montecarlo._rng import (
    ResampleGenerator,
    get_default_generator,
    seed_default_generator,
)
from pybootknife.montecarlo.design import (
    BootDesign,
    ResampleDesign,
    TwoSampleDesign,
    TwoSampleOptions,
)
from pybootknife.montecarlo.solution import (
    BootSolution,
    ResampleSolution,
    TwoSampleSolution,
)
from pybootknife.montecarlo.solvers import boot, boot_two_sample, resample

__all__ = [
    "resample",
    "boot",
    "boot_two_sample",
    "ResampleMode",
    "ResampleGenerator",
    "get_default_generator",
    "seed_default_generator",
    "ResampleDesign",
    "BootDesign",
    "TwoSampleDesign",
    "TwoSampleOptions",
    "ResampleSolution",
    "BootSolution",
    "TwoSampleSolution",
]
