"""
Solution wrappers for resampling results.

ResampleSolution, BootSolution and TwoSampleSolution wrap Result[P]
and provide convenient accessors.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pybootknife.core.result import Result
from pybootknife.montecarlo._common import (
    BootParams,
    ResampleMode,
    ResampleParams,
    TwoSampleParams,
)

if TYPE_CHECKING:
    from pybootknife.montecarlo.design import (
        BootDesign,
        ResampleDesign,
        TwoSampleDesign,
    )


@dataclass
class ResampleSolution:
    """
    User-facing balanced resample.

    bootsam is the (n, nboot) matrix: 1-based indices when the
    population was a count, population values otherwise. indices holds
    the same draws as 0-based positions, ready for data[indices].
    """
    _result: Result[ResampleParams]
    _design: 'ResampleDesign'

    # --- Matrix ---

    @property
    def bootsam(self) -> NDArray[Any]:
        """Resample matrix, shape (n, nboot)."""
        return self._result.params.bootsam

    @property
    def indices(self) -> NDArray[np.intp]:
        """0-based resample indices, shape (n, nboot)."""
        return self._result.params.indices

    @property
    def excluded(self) -> NDArray[np.intp] | None:
        """0-based row left out of each column; None in plain mode."""
        return self._result.params.excluded

    @property
    def fallback(self) -> NDArray[np.bool_]:
        """Columns where the exhaustion fallback re-admitted the excluded row."""
        return self._result.params.fallback

    @property
    def frequencies(self) -> NDArray[np.intp]:
        """Number of times each item was drawn across all columns."""
        return np.bincount(self.indices.ravel(), minlength=self.n)

    # --- Metadata ---

    @property
    def n(self) -> int:
        return self._design.n

    @property
    def nboot(self) -> int:
        return self._result.params.nboot

    @property
    def mode(self) -> ResampleMode:
        return self._design.mode

    @property
    def weights(self) -> NDArray[np.int64]:
        """Target count per item."""
        return self._design.weights

    @property
    def seed(self) -> int | float | None:
        return self._design.seed

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def __repr__(self) -> str:
        return (
            f"ResampleSolution(n={self.n}, nboot={self.nboot}, "
            f"mode={self.mode.value!r}, backend={self.backend_name!r})"
        )


@dataclass
class BootSolution:
    """
    User-facing statistic bootstrap.

    t0, t, bias and se of the statistic, plus the resample the
    replicates were computed on.
    """
    _result: Result[BootParams]
    _design: 'BootDesign'

    @property
    def t0(self) -> NDArray[np.floating[Any]]:
        """Statistic on the original data, shape (k,)."""
        return self._result.params.t0

    @property
    def t(self) -> NDArray[np.floating[Any]]:
        """Bootstrap replicates, shape (nboot, k)."""
        return self._result.params.t

    @property
    def nboot(self) -> int:
        return self._result.params.nboot

    @property
    def bias(self) -> NDArray[np.floating[Any]]:
        """Bootstrap bias estimate: mean(t) - t0, shape (k,)."""
        return self._result.params.bias

    @property
    def se(self) -> NDArray[np.floating[Any]]:
        """Bootstrap standard error: sd(t), shape (k,)."""
        return self._result.params.se

    @property
    def resample(self) -> ResampleSolution:
        """The balanced resample the replicates were computed on."""
        return ResampleSolution(
            _result=self._result.params.resample,
            _design=self._design.resample,
        )

    # --- Metadata ---

    @property
    def data(self) -> NDArray:
        return self._design.data

    @property
    def mode(self) -> ResampleMode:
        return self._design.resample.mode

    @property
    def seed(self) -> int | float | None:
        return self._design.resample.seed

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def __repr__(self) -> str:
        return (
            f"BootSolution(nboot={self.nboot}, k={len(self.t0)}, "
            f"mode={self.mode.value!r}, backend={self.backend_name!r})"
        )


@dataclass
class TwoSampleSolution:
    """
    User-facing two-sample bootstrap differences.

    t holds statistic(x*) - statistic(y*) for paired resample columns;
    x and y give the per-sample bootstraps.
    """
    _result: Result[TwoSampleParams]
    _design: 'TwoSampleDesign'

    @property
    def t0(self) -> NDArray[np.floating[Any]]:
        """statistic(x) - statistic(y), shape (k,)."""
        return self._result.params.t0

    @property
    def t(self) -> NDArray[np.floating[Any]]:
        """Replicate differences, shape (nboot, k)."""
        return self._result.params.t

    @property
    def nboot(self) -> int:
        return self._result.params.nboot

    @property
    def bias(self) -> NDArray[np.floating[Any]]:
        return self._result.params.bias

    @property
    def se(self) -> NDArray[np.floating[Any]]:
        return self._result.params.se

    @property
    def x(self) -> BootSolution:
        return BootSolution(_result=self._result.params.x, _design=self._design.x)

    @property
    def y(self) -> BootSolution:
        return BootSolution(_result=self._result.params.y, _design=self._design.y)

    @property
    def seed(self) -> int | float | None:
        return self._design.seed

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def __repr__(self) -> str:
        return (
            f"TwoSampleSolution(nboot={self.nboot}, k={len(self.t0)}, "
            f"backend={self.backend_name!r})"
        )
