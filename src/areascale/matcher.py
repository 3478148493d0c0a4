"""
matcher.py

Rescale a feature collection until its OSS area, rounded to `decimals`
places, equals the rounded target.

Algorithm:
1. reject a target that is not a finite number > 0;
2. take the planar bbox midpoint of the *input* as pivot, fixed for the run;
3. up to `max_iter` times: measure, stop when the rounded areas agree,
   otherwise rescale the current collection by `sqrt(target / area)`;
4. give up with `ConvergenceError` carrying both rounded values.

Area scales with the square of a uniform linear factor, so one step is exact
in a purely planar setting. The lon/lat round trip through the projection
drifts slightly, hence the re-measure on every round instead of composing
factors. The loop is bounded, pure and does not touch its input.
"""
import math
from typing import Iterable, Optional

from areascale.area import collection_area
from areascale.bounds import compute_bounds
from areascale.config import DEFAULT_DECIMALS, DEFAULT_MAX_ITER
from areascale.features import Feature, FeatureCollection
from areascale.projection import Projector, default_projector
from areascale.scaling import scale_collection


class AreaMatchError(ValueError):
    """Base class for failures of `match_area`."""


class InvalidTargetError(AreaMatchError):
    """Target area is not finite or not > 0."""


class DegenerateGeometryError(AreaMatchError):
    """Measured area is not finite or not > 0; nothing to scale."""


class ConvergenceError(AreaMatchError):
    """Rounded equality not reached within the iteration cap."""

    def __init__(self, achieved: float, target: float, decimals: int, iterations: int):
        self.achieved = achieved
        self.target = target
        self.decimals = decimals
        self.iterations = iterations
        super().__init__(
            f"Could not reach exact target at {decimals} decimals after {iterations} "
            f"iterations. Final={achieved:.{decimals}f} Target={target:.{decimals}f}"
        )


def round_half_away(value: float, decimals: int) -> float:
    """Round to `decimals` places, ties away from zero.

    `round_half_away(0.125, 2) == 0.13`, `round_half_away(-0.125, 2) == -0.13`.
    """
    p = 10.0 ** decimals
    return math.copysign(math.floor(abs(value) * p + 0.5), value) / p


def _is_positive_number(value) -> bool:
    try:
        v = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(v) and v > 0.0


def match_area(
    collection: Iterable[Feature],
    target: float,
    decimals: int = DEFAULT_DECIMALS,
    max_iter: int = DEFAULT_MAX_ITER,
    projector: Optional[Projector] = None,
) -> FeatureCollection:
    """Return a rescaled copy of `collection` whose rounded OSS area is `target`.

    Raises:
    - InvalidTargetError before any work if `target` is unusable;
    - DegenerateGeometryError when a measurement is non-finite or <= 0;
    - ConvergenceError when `max_iter` rounds are not enough.
    """
    if not _is_positive_number(target):
        raise InvalidTargetError(f"Target OSS area must be a finite number > 0 (m²), got {target!r}")
    target = float(target)
    projector = projector or default_projector()
    target_rounded = round_half_away(target, decimals)

    current = FeatureCollection.from_features(collection)
    pivot = compute_bounds(current, projector).center

    for _ in range(max_iter):
        area = collection_area(current, projector)
        if not math.isfinite(area) or area <= 0.0:
            raise DegenerateGeometryError(f"Current OSS area is {area!r}; cannot scale.")
        if round_half_away(area, decimals) == target_rounded:
            return current
        factor = math.sqrt(target / area)
        current = scale_collection(current, pivot, factor, projector)

    final_area = collection_area(current, projector)
    if not math.isfinite(final_area) or final_area <= 0.0:
        raise DegenerateGeometryError(f"Current OSS area is {final_area!r}; cannot scale.")
    final_rounded = round_half_away(final_area, decimals)
    if final_rounded == target_rounded:
        return current
    raise ConvergenceError(final_rounded, target_rounded, decimals, max_iter)
