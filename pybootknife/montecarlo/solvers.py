"""
Solver dispatch for balanced resampling.

Provides resample(), boot() and boot_two_sample().
"""

from __future__ import annotations

from typing import Any, Callable, Literal

from numpy.typing import ArrayLike

from pybootknife.core.exceptions import ValidationError
from pybootknife.montecarlo._common import ResampleMode
from pybootknife.montecarlo._rng import ResampleGenerator
from pybootknife.montecarlo.backends.cpu import (
    CPUBootBackend,
    CPUResampleBackend,
    CPUTwoSampleBackend,
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


BackendChoice = Literal['cpu', 'auto']
# The depleting-pool draw is sequential in every cell, so there is
# no GPU backend.

_BACKENDS = {
    'resample': CPUResampleBackend,
    'boot': CPUBootBackend,
    'two_sample': CPUTwoSampleBackend,
}


def _get_backend(kind: str, backend: str = 'cpu'):
    """Select the backend for a computation kind."""
    if backend in ('cpu', 'auto'):
        return _BACKENDS[kind]()
    raise ValidationError(
        f"Unknown backend: {backend!r}. Use 'cpu'.", value=backend
    )


def resample(
    population: int | ArrayLike | ResampleDesign,
    nboot: int | None = None,
    *,
    mode: ResampleMode | str = ResampleMode.PLAIN,
    weights: ArrayLike | None = None,
    seed: Any = None,
    generator: ResampleGenerator | None = None,
    backend: BackendChoice = 'cpu',
) -> ResampleSolution:
    """
    Balanced bootstrap (or bootknife) resample matrix.

    Every item k appears in exactly weights[k] of the n * nboot cells;
    by default each item appears nboot times. In bootknife mode one
    item is left out of each column: item b mod n for column b while a
    full pass of n columns remains, a random item afterwards.

    Parameters
    ----------
    population : int, array-like, or ResampleDesign
        Positive integer n for an index matrix, or a vector of values
        for a value matrix. A pre-built ResampleDesign is used as is.
    nboot : int
        Number of resamples (columns).
    mode : str
        "plain" (default) or "bootknife".
    weights : array-like or None
        Non-negative integer target count per item, summing to
        n * nboot. Default: nboot for every item.
    seed : int or float or None
        Resets the generator before drawing. Same seed and arguments
        give the same matrix.
    generator : ResampleGenerator or None
        Generator to draw from. Default: the process-wide shared
        generator, whose stream continues across unseeded calls. Use
        one generator per concurrent worker.
    backend : str
        'cpu' (default).

    Returns
    -------
    ResampleSolution
        bootsam (1-based indices or values), indices (0-based),
        excluded rows, fallback flags.

    Examples
    --------
    >>> resample(3, 20).frequencies
    array([20, 20, 20])
    >>> sol = resample([23, 44, 36], 10, weights=[20, 0, 10], seed=1)
    >>> 44 in sol.bootsam
    False
    """
    if isinstance(population, ResampleDesign):
        design = population
    else:
        design = ResampleDesign.for_resample(
            population,
            nboot,
            mode=mode,
            weights=weights,
            seed=seed,
            generator=generator,
        )

    be = _get_backend('resample', backend)
    result = be.solve(design)
    return ResampleSolution(_result=result, _design=design)


def boot(
    data: ArrayLike | BootDesign,
    statistic: Callable | None = None,
    nboot: int = 2000,
    *,
    mode: ResampleMode | str = ResampleMode.BOOTKNIFE,
    weights: ArrayLike | None = None,
    seed: Any = None,
    generator: ResampleGenerator | None = None,
    backend: BackendChoice = 'cpu',
) -> BootSolution:
    """
    Bootstrap a statistic over balanced resample columns.

    The statistic is evaluated on the original data (t0) and on each
    column of a balanced resample of the data (t). For a semi-parametric
    model bootstrap pass the model residuals as data and a statistic
    that refits the model to fitted + resampled residuals and returns
    the estimates of interest.

    Parameters
    ----------
    data : array-like or BootDesign
        Numeric vector to resample.
    statistic : callable
        fn(sample) -> scalar or (k,) array.
    nboot : int
        Number of resamples. Default 2000.
    mode : str
        "bootknife" (default) or "plain".
    weights, seed, generator, backend
        As for resample().

    Returns
    -------
    BootSolution
        t0, t, bias, se and the underlying resample.
    """
    if isinstance(data, BootDesign):
        design = data
    else:
        design = BootDesign.for_boot(
            data,
            statistic,
            nboot,
            mode=mode,
            weights=weights,
            seed=seed,
            generator=generator,
        )

    be = _get_backend('boot', backend)
    result = be.solve(design)
    return BootSolution(_result=result, _design=design)


def boot_two_sample(
    x: ArrayLike | TwoSampleDesign,
    y: ArrayLike | None = None,
    statistic: Callable | None = None,
    nboot: int = 2000,
    *,
    options: TwoSampleOptions | None = None,
    backend: BackendChoice = 'cpu',
    **option_overrides: Any,
) -> TwoSampleSolution:
    """
    Bootstrap distribution of statistic(x) - statistic(y).

    x and y are resampled independently (x first, then y, from one
    generator stream) and the replicate statistics are differenced
    column by column.

    Parameters
    ----------
    x, y : array-like
        The two samples. x may instead be a pre-built TwoSampleDesign.
    statistic : callable
        fn(sample) -> scalar or (k,) array, applied to each sample.
    nboot : int
        Number of resamples per sample. Default 2000.
    options : TwoSampleOptions or None
        mode, weights_x, weights_y, seed, generator.
    **option_overrides
        Any TwoSampleOptions field by name; unknown names raise
        ValidationError.

    Returns
    -------
    TwoSampleSolution
        t0, t, bias, se and the per-sample bootstraps.
    """
    if isinstance(x, TwoSampleDesign):
        design = x
    else:
        resolved = TwoSampleOptions.resolve(options, **option_overrides)
        design = TwoSampleDesign.for_two_sample(
            x, y, statistic, nboot, options=resolved,
        )

    be = _get_backend('two_sample', backend)
    result = be.solve(design)
    return TwoSampleSolution(_result=result, _design=design)
