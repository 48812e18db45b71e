"""
Common data structures for resampling.

ResampleParams, BootParams and TwoSampleParams are the parameter
payloads wrapped by Result[P] and exposed through Solution classes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pybootknife.core.result import Result


class ResampleMode(str, Enum):
    """
    Resampling scheme.

    PLAIN: balanced bootstrap.
    BOOTKNIFE: balanced bootstrap with one item left out of each
        resample (systematic round-robin over complete passes of n
        columns, random in the trailing partial pass).
    """
    PLAIN = "plain"
    BOOTKNIFE = "bootknife"


@dataclass(frozen=True)
class ResampleParams:
    """
    Parameter payload for a balanced resample.

    - bootsam: 1-based indices (index mode) or population values
      (data mode), shape (n, nboot)
    - indices: 0-based indices into the population, shape (n, nboot)
    - excluded: 0-based row left out of each column (bootknife only)
    - fallback: columns in which the exhaustion fallback fired
    """
    bootsam: NDArray[Any]                       # shape (n, nboot)
    indices: NDArray[np.intp]                   # shape (n, nboot)
    excluded: NDArray[np.intp] | None           # shape (nboot,)
    fallback: NDArray[np.bool_]                 # shape (nboot,)
    nboot: int


@dataclass(frozen=True)
class BootParams:
    """
    Parameter payload for a statistic bootstrap.

    - t0: statistic on the original data
    - t: statistic on each resample (nboot rows, k columns)
    - bias: mean(t) - t0
    - se: sd(t)
    - resample: the balanced resample the replicates were computed on
    """
    t0: NDArray[np.floating[Any]]              # shape (k,)
    t: NDArray[np.floating[Any]]               # shape (nboot, k)
    nboot: int
    bias: NDArray[np.floating[Any]]            # shape (k,)
    se: NDArray[np.floating[Any]]              # shape (k,)
    resample: Result[ResampleParams]


@dataclass(frozen=True)
class TwoSampleParams:
    """
    Parameter payload for two-sample bootstrap differences.

    - t0: statistic(x) - statistic(y)
    - t: per-resample differences t_x - t_y
    - x, y: the per-sample bootstraps that were differenced
    """
    t0: NDArray[np.floating[Any]]              # shape (k,)
    t: NDArray[np.floating[Any]]               # shape (nboot, k)
    nboot: int
    bias: NDArray[np.floating[Any]]            # shape (k,)
    se: NDArray[np.floating[Any]]              # shape (k,)
    x: Result[BootParams]
    y: Result[BootParams]
