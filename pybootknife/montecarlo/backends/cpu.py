"""
CPU backends for balanced resampling.

CPUResampleBackend: Balanced bootstrap / bootknife index generation.
CPUBootBackend: Statistic replicates over a balanced resample.
CPUTwoSampleBackend: Differences of two independent statistic bootstraps.
"""

from __future__ import annotations

import warnings

import numpy as np
from numpy.typing import NDArray

from pybootknife.core.exceptions import ValidationError
from pybootknife.core.result import Result
from pybootknife.core.compute.timing import Timer
from pybootknife.montecarlo._common import (
    BootParams,
    ResampleMode,
    ResampleParams,
    TwoSampleParams,
)
from pybootknife.montecarlo._rng import ResampleGenerator
from pybootknife.montecarlo.design import (
    BootDesign,
    ResampleDesign,
    TwoSampleDesign,
)


class CPUResampleBackend:
    """
    CPU backend for balanced resampling.

    Each of the n * nboot cells is filled by an inverse-CDF draw over a
    pool of remaining counts that starts at the target weights and is
    decremented after every draw. Because the pool is exhausted exactly
    when the matrix is full, item k lands in exactly weights[k] cells.
    """

    @property
    def name(self) -> str:
        return 'cpu_balanced'

    def solve(self, design: ResampleDesign) -> Result[ResampleParams]:
        """Draw the resample matrix and return Result[ResampleParams]."""
        timer = Timer()
        timer.start()

        if design.seed is not None:
            design.generator.seed(design.seed)

        bootknife = design.mode is ResampleMode.BOOTKNIFE

        with timer.section('draws'):
            indices, excluded, fallback = self._balanced_draws(
                design.n, design.nboot, design.weights, bootknife,
                design.generator,
            )

        with timer.section('fill'):
            if design.data_mode:
                bootsam = design.population[indices]
            else:
                bootsam = indices + 1

        timer.stop()

        warnings_list: list[str] = []
        n_fallback = int(fallback.sum())
        if n_fallback:
            warnings_list.append(
                f"count pool exhausted in {n_fallback} column(s): the "
                f"excluded item was made available again for those draws"
            )

        params = ResampleParams(
            bootsam=bootsam,
            indices=indices,
            excluded=excluded,
            fallback=fallback,
            nboot=design.nboot,
        )

        return Result(
            params=params,
            info={
                'n': design.n,
                'nboot': design.nboot,
                'mode': design.mode.value,
                'data_mode': design.data_mode,
                'weighted': design.weighted,
                'algorithm': design.generator.algorithm,
                'n_fallback_columns': n_fallback,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )

    def _balanced_draws(
        self,
        n: int,
        nboot: int,
        weights: NDArray[np.int64],
        bootknife: bool,
        generator: ResampleGenerator,
    ) -> tuple[NDArray[np.intp], NDArray[np.intp] | None, NDArray[np.bool_]]:
        """
        Fill an (n, nboot) matrix of 0-based indices column by column.

        Per column, n uniforms are drawn first. In bootknife mode the
        excluded row is then chosen: round-robin (column b excludes
        b mod n) while a complete pass of n columns remains, and
        uniformly at random (one extra draw) in the trailing partial
        pass. The excluded item's count is treated as zero for the whole
        column unless that leaves nothing to draw from, in which case the
        full pool is used for that draw and the column is flagged.

        Returns:
            (indices, excluded or None, fallback flags)
        """
        remaining = weights.copy()
        indices = np.empty((n, nboot), dtype=np.intp)
        excluded = np.empty(nboot, dtype=np.intp) if bootknife else None
        fallback = np.zeros(nboot, dtype=bool)
        full_blocks = nboot // n
        cum = np.empty(n, dtype=remaining.dtype)
        cdf = np.empty(n, dtype=np.float64)

        for b in range(nboot):
            u = generator.random(n)

            r = None
            if bootknife:
                block = b // n
                if block == full_blocks:
                    r = int(generator.random() * n)
                else:
                    r = b - block * n
                excluded[b] = r

            for i in range(n):
                np.cumsum(remaining, out=cum)
                if r is not None:
                    cum[r:] -= remaining[r]
                    if cum[-1] == 0:
                        np.cumsum(remaining, out=cum)
                        fallback[b] = True

                # Count of normalized cumulative entries <= u.
                np.divide(cum, cum[-1], out=cdf)
                j = int(np.searchsorted(cdf, u[i], side='right'))
                indices[i, b] = j
                remaining[j] -= 1

        return indices, excluded, fallback


def _statistic_vector(value) -> NDArray[np.float64]:
    return np.atleast_1d(np.asarray(value, dtype=np.float64)).ravel()


def _bias_se(
    t: NDArray[np.float64],
    t0: NDArray[np.float64],
    warnings_list: list[str],
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Bootstrap bias mean(t) - t0 and standard error sd(t)."""
    nboot, k = t.shape
    bias = np.mean(t, axis=0) - t0
    if nboot > 1:
        se = np.std(t, axis=0, ddof=1)
    else:
        se = np.full(k, np.nan)
        warnings_list.append(
            "standard error undefined for a single resample (nboot=1)"
        )
    return bias, se


class CPUBootBackend:
    """
    CPU backend for bootstrapping a statistic.

    Draws one balanced resample of the data with CPUResampleBackend and
    evaluates the statistic on a copy of every column, so the returned
    resample matrix is never touched by the statistic.

    Args:
        stacklevel: Passed to warnings.warn so that warnings point at
            the caller of the public entry point.
    """

    def __init__(self, stacklevel: int = 3):
        self._stacklevel = stacklevel

    @property
    def name(self) -> str:
        return 'cpu_boot'

    def solve(self, design: BootDesign) -> Result[BootParams]:
        """Run the bootstrap and return Result[BootParams]."""
        timer = Timer()
        timer.start()

        statistic = design.statistic
        nboot = design.resample.nboot

        with timer.section('t0_computation'):
            t0 = _statistic_vector(statistic(design.data.copy()))

        with timer.section('draws'):
            resample = CPUResampleBackend().solve(design.resample)

        k = len(t0)
        t = np.empty((nboot, k), dtype=np.float64)
        warnings_list: list[str] = list(resample.warnings)

        with timer.section('statistic_replicates'):
            data = design.data
            indices = resample.params.indices
            for b in range(nboot):
                t[b] = _statistic_vector(statistic(data[indices[:, b]]))

        n_bad = int(np.sum(~np.all(np.isfinite(t), axis=1)))
        if n_bad:
            msg = f"statistic returned non-finite values in {n_bad} resample(s)"
            warnings.warn(msg, RuntimeWarning, stacklevel=self._stacklevel)
            warnings_list.append(msg)

        with timer.section('summary_statistics'):
            bias, se = _bias_se(t, t0, warnings_list)

        timer.stop()

        params = BootParams(
            t0=t0,
            t=t,
            nboot=nboot,
            bias=bias,
            se=se,
            resample=resample,
        )

        return Result(
            params=params,
            info={
                'n': design.resample.n,
                'nboot': nboot,
                'k': k,
                'mode': design.resample.mode.value,
                'algorithm': design.resample.generator.algorithm,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )


class CPUTwoSampleBackend:
    """
    CPU backend for two-sample bootstrap differences.

    x and y are bootstrapped independently from one generator stream
    (x first) and the replicate statistics are differenced pairwise.
    """

    @property
    def name(self) -> str:
        return 'cpu_two_sample'

    def solve(self, design: TwoSampleDesign) -> Result[TwoSampleParams]:
        """Run both bootstraps and return Result[TwoSampleParams]."""
        timer = Timer()
        timer.start()

        if design.seed is not None:
            design.generator.seed(design.seed)

        boot_backend = CPUBootBackend(stacklevel=4)
        with timer.section('x_bootstrap'):
            rx = boot_backend.solve(design.x)
        with timer.section('y_bootstrap'):
            ry = boot_backend.solve(design.y)

        px, py = rx.params, ry.params
        if px.t0.shape != py.t0.shape:
            raise ValidationError(
                f"statistic returned {px.t0.shape[0]} value(s) for x but "
                f"{py.t0.shape[0]} for y"
            )

        warnings_list = [f"x: {w}" for w in rx.warnings]
        warnings_list += [f"y: {w}" for w in ry.warnings]

        with timer.section('summary_statistics'):
            t0 = px.t0 - py.t0
            t = px.t - py.t
            bias, se = _bias_se(t, t0, [])

        timer.stop()

        params = TwoSampleParams(
            t0=t0,
            t=t,
            nboot=px.nboot,
            bias=bias,
            se=se,
            x=rx,
            y=ry,
        )

        return Result(
            params=params,
            info={
                'n1': design.x.resample.n,
                'n2': design.y.resample.n,
                'nboot': px.nboot,
                'k': len(t0),
                'mode': design.x.resample.mode.value,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
