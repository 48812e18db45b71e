"""
Design classes for balanced resampling.

ResampleDesign, BootDesign and TwoSampleDesign encapsulate all inputs
needed by backends. Immutable, validated at construction: every check
runs before the generator is touched, so an invalid request never
consumes random numbers or yields a partial matrix.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pybootknife.core.exceptions import (
    InvalidModeError,
    InvalidPopulationError,
    InvalidResampleCountError,
    InvalidWeightsError,
    ValidationError,
    WeightSumMismatchError,
)
from pybootknife.core.validation import (
    check_array,
    check_count_vector,
    check_finite,
    check_min_samples,
    check_positive_int,
    check_vector,
    is_scalar,
)
from pybootknife.montecarlo._common import ResampleMode
from pybootknife.montecarlo._rng import (
    ResampleGenerator,
    get_default_generator,
    validate_seed,
)


def check_mode(mode: ResampleMode | str) -> ResampleMode:
    """Resolve mode to a ResampleMode, raising InvalidModeError otherwise."""
    if isinstance(mode, ResampleMode):
        return mode
    if isinstance(mode, str):
        try:
            return ResampleMode(mode.lower())
        except ValueError:
            pass
    raise InvalidModeError(
        f"mode must be 'plain' or 'bootknife', got {mode!r}", value=mode
    )


def _check_generator(generator: ResampleGenerator | None) -> ResampleGenerator:
    if generator is None:
        return get_default_generator()
    if not isinstance(generator, ResampleGenerator):
        raise ValidationError(
            f"generator must be a ResampleGenerator, "
            f"got {type(generator).__name__}",
            value=generator,
        )
    return generator


def _check_population(population: Any) -> tuple[NDArray | None, int]:
    """Split population into (values or None, n)."""
    if is_scalar(population) and not isinstance(population, (str, bytes)):
        n = check_positive_int(population, "population", InvalidPopulationError)
        return None, n

    try:
        values = np.asarray(population)
    except (ValueError, TypeError) as e:
        raise InvalidPopulationError(
            f"population: cannot convert to array: {e}", value=population
        ) from e
    values = check_vector(values, "population", InvalidPopulationError)
    check_min_samples(values, 1, "population", InvalidPopulationError)
    return values.copy(), values.shape[0]


@dataclass(frozen=True)
class ResampleDesign:
    """
    Frozen design for one balanced resample.

    Attributes:
        population: Data vector (data mode) or None (index mode).
        n: Number of items (rows of the output matrix).
        nboot: Number of resamples (columns of the output matrix).
        mode: ResampleMode.PLAIN or ResampleMode.BOOTKNIFE.
        weights: Target count per item, shape (n,), sums to n * nboot.
        weighted: True if weights were supplied by the caller.
        seed: Seed applied to the generator before drawing, or None.
        generator: Generator the draws come from.
    """
    population: NDArray | None
    n: int
    nboot: int
    mode: ResampleMode
    weights: NDArray[np.int64]
    weighted: bool
    seed: int | float | None
    generator: ResampleGenerator

    @property
    def data_mode(self) -> bool:
        return self.population is not None

    @classmethod
    def for_resample(
        cls,
        population,
        nboot: int,
        *,
        mode: ResampleMode | str = ResampleMode.PLAIN,
        weights: ArrayLike | None = None,
        seed: Any = None,
        generator: ResampleGenerator | None = None,
    ) -> ResampleDesign:
        """
        Create a resample design with validation.

        Args:
            population: Positive integer n (index mode) or a vector of
                values (data mode). Row/column vectors are flattened.
            nboot: Number of resamples. Must be a positive integer.
            mode: "plain" (default) or "bootknife".
            weights: Non-negative integer target count per item, summing
                to n * nboot. Default: nboot for every item.
            seed: Finite real scalar. Resets the generator before drawing.
            generator: ResampleGenerator to draw from. Default: the
                process-wide shared generator.

        Returns:
            Validated ResampleDesign.

        Raises:
            InvalidPopulationError: Bad count or non-vector population.
            InvalidResampleCountError: nboot not a positive integer.
            InvalidModeError: Unknown mode.
            InvalidWeightsError: Wrong length or non-count entries.
            WeightSumMismatchError: sum(weights) != n * nboot.
            InvalidSeedError: Non-finite or non-scalar seed.
        """
        values, n = _check_population(population)
        nboot = check_positive_int(nboot, "nboot", InvalidResampleCountError)
        mode = check_mode(mode)

        if weights is None:
            counts = np.full(n, nboot, dtype=np.int64)
        else:
            counts = check_count_vector(
                weights, n, "weights", InvalidWeightsError
            )
            total = int(counts.sum())
            if total != n * nboot:
                raise WeightSumMismatchError(
                    f"weights: must add up to n * nboot = {n * nboot}, "
                    f"got {total}",
                    value=weights,
                    expected=n * nboot,
                    actual=total,
                )

        if seed is not None:
            seed = validate_seed(seed)

        return cls(
            population=values,
            n=n,
            nboot=nboot,
            mode=mode,
            weights=counts,
            weighted=weights is not None,
            seed=seed,
            generator=_check_generator(generator),
        )


@dataclass(frozen=True)
class BootDesign:
    """
    Frozen design for bootstrapping a statistic over resample columns.

    Attributes:
        resample: Design of the underlying balanced resample (data mode).
        statistic: fn(sample) -> scalar or (k,). Called once on the
            original data and once per resample column. For a
            semi-parametric model bootstrap, data are the residuals and
            statistic refits the model on fitted + resampled residuals.
    """
    resample: ResampleDesign
    statistic: Callable

    @property
    def data(self) -> NDArray[np.floating[Any]]:
        return self.resample.population

    @classmethod
    def for_boot(
        cls,
        data,
        statistic: Callable,
        nboot: int = 2000,
        *,
        mode: ResampleMode | str = ResampleMode.BOOTKNIFE,
        weights: ArrayLike | None = None,
        seed: Any = None,
        generator: ResampleGenerator | None = None,
    ) -> BootDesign:
        """
        Create a statistic bootstrap design with validation.

        Args:
            data: Finite numeric vector to resample (e.g. model residuals).
            statistic: Function mapping a resampled vector to an estimate.
            nboot: Number of resamples. Must be >= 1.
            mode: "bootknife" (default) or "plain".
            weights: Optional target counts, see ResampleDesign.
            seed: Random seed.
            generator: ResampleGenerator to draw from.

        Returns:
            Validated BootDesign.
        """
        if not callable(statistic):
            raise ValidationError(
                f"statistic must be callable, got {type(statistic).__name__}",
                value=statistic,
            )
        data_arr = check_vector(check_array(data, "data"), "data")
        check_min_samples(data_arr, 1, "data")
        check_finite(data_arr, "data")

        resample = ResampleDesign.for_resample(
            data_arr,
            nboot,
            mode=mode,
            weights=weights,
            seed=seed,
            generator=generator,
        )
        return cls(resample=resample, statistic=statistic)


@dataclass(frozen=True)
class TwoSampleOptions:
    """
    Recognized options for two-sample bootstrap differences.

    Attributes:
        mode: Resampling mode for both samples. Default "bootknife".
        weights_x: Target counts for x, or None for uniform.
        weights_y: Target counts for y, or None for uniform.
        seed: Seed applied once before resampling x, then y.
        generator: Generator shared by both samples. Default: the
            process-wide shared generator.
    """
    mode: ResampleMode | str = ResampleMode.BOOTKNIFE
    weights_x: ArrayLike | None = None
    weights_y: ArrayLike | None = None
    seed: Any = None
    generator: ResampleGenerator | None = None

    @classmethod
    def resolve(
        cls,
        options: TwoSampleOptions | None = None,
        **overrides: Any,
    ) -> TwoSampleOptions:
        """
        Merge keyword overrides into options, rejecting unknown names.

        Raises:
            ValidationError: If an override is not a recognized option
                or options is not a TwoSampleOptions.
        """
        if options is None:
            options = cls()
        elif not isinstance(options, cls):
            raise ValidationError(
                f"options must be TwoSampleOptions, "
                f"got {type(options).__name__}",
                value=options,
            )
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValidationError(
                f"unrecognized two-sample option(s) {unknown}; "
                f"recognized: {sorted(known)}",
                value=unknown,
            )
        return replace(options, **overrides)


@dataclass(frozen=True)
class TwoSampleDesign:
    """
    Frozen design for two-sample bootstrap differences.

    Attributes:
        x: Bootstrap design for the first sample.
        y: Bootstrap design for the second sample.
        seed: Seed applied once before both samples are resampled.
        generator: Generator shared by x and y.
    """
    x: BootDesign
    y: BootDesign
    seed: int | float | None
    generator: ResampleGenerator

    @classmethod
    def for_two_sample(
        cls,
        x,
        y,
        statistic: Callable,
        nboot: int = 2000,
        *,
        options: TwoSampleOptions | None = None,
    ) -> TwoSampleDesign:
        """
        Create a two-sample design with validation.

        Args:
            x: First sample, numeric vector.
            y: Second sample, numeric vector.
            statistic: fn(sample) -> scalar or (k,), applied to each.
            nboot: Number of resamples per sample.
            options: Resolved TwoSampleOptions.

        Returns:
            Validated TwoSampleDesign.
        """
        options = TwoSampleOptions.resolve(options)
        generator = _check_generator(options.generator)
        seed = None if options.seed is None else validate_seed(options.seed)

        # Seeding happens once at the two-sample level, not per sample.
        x_design = BootDesign.for_boot(
            x, statistic, nboot,
            mode=options.mode, weights=options.weights_x,
            generator=generator,
        )
        y_design = BootDesign.for_boot(
            y, statistic, nboot,
            mode=options.mode, weights=options.weights_y,
            generator=generator,
        )
        return cls(x=x_design, y=y_design, seed=seed, generator=generator)
