"""Distribution engine for aggregates of independent fair dice.

Every distribution is a dense list of probabilities indexed from 0, where
index 0 is the smallest value the aggregate can take:

  sum    → number of dice rolled
  min    → 1
  max    → 1
  inset  → 0 (no die landed in the set)

Sum, min and max are built one die at a time. The accumulator holds the PMF
of the aggregate over the dice seen so far, and each new die is folded in by
the combinator for that aggregate. Count-in-set is a sum of independent
binomials, one per die group, combined by full convolution.
"""

from __future__ import annotations

import enum
import logging
import math
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from functools import lru_cache

from diceplot.dice import DiceSpec, DieGroup, IntegerSet, parse_dice, parse_integer_set

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Selectors
# ---------------------------------------------------------------------------


class Aggregate(enum.Enum):
    SUM = "sum"
    MIN = "min"
    MAX = "max"
    IN_SET = "inset"

    @property
    def display_name(self) -> str:
        return _AGGREGATE_NAMES[self]


_AGGREGATE_NAMES: dict[Aggregate, str] = {
    Aggregate.SUM: "Sum",
    Aggregate.MIN: "Min",
    Aggregate.MAX: "Max",
    Aggregate.IN_SET: "InSet",
}


class DistKind(enum.Enum):
    PDF = "pdf"
    CDF = "cdf"
    CCDF = "ccdf"

    @property
    def y_axis_label(self) -> str:
        return _Y_AXIS_LABELS[self]

    @property
    def y_axis_max(self) -> float | None:
        return None if self is DistKind.PDF else 1.0


_Y_AXIS_LABELS: dict[DistKind, str] = {
    DistKind.PDF: "Pr(X=x)",
    DistKind.CDF: "Pr(X≤x)",
    DistKind.CCDF: "Pr(X≥x)",
}


@dataclass(frozen=True, slots=True)
class Distribution:
    """A computed distribution, ready to hand to a chart."""

    kind: DistKind
    aggregate: Aggregate
    values: list[float]
    start_x: int
    label: str

    @property
    def y_axis_label(self) -> str:
        return self.kind.y_axis_label

    @property
    def y_axis_max(self) -> float | None:
        return self.kind.y_axis_max

    @property
    def xs(self) -> range:
        return range(self.start_x, self.start_x + len(self.values))


# ---------------------------------------------------------------------------
# PMF primitives
# ---------------------------------------------------------------------------


def uniform_pmf(sides: int) -> list[float]:
    """PMF of one fair die; index 0 is face 1."""
    return [1.0 / sides] * sides


def cdf(pmf: Sequence[float]) -> list[float]:
    """Pr(X <= x) as a running prefix sum of pmf."""
    out: list[float] = []
    total = 0.0
    for p in pmf:
        total += p
        out.append(total)
    return out


def ccdf(pmf: Sequence[float]) -> list[float]:
    """Pr(X >= x), i.e. entry i is 1 - sum(pmf[:i]). Entry 0 is always 1."""
    out: list[float] = []
    below = 0.0
    for p in pmf:
        out.append(1.0 - below)
        below += p
    return out


def convolve(a: Sequence[float], b: Sequence[float]) -> list[float]:
    """Full discrete convolution of two finite PMFs."""
    if not a or not b:
        return []
    out = [0.0] * (len(a) + len(b) - 1)
    for i, pa in enumerate(a):
        if pa == 0.0:
            continue
        for j, pb in enumerate(b):
            out[i + j] += pa * pb
    return out


# ---------------------------------------------------------------------------
# Combinators: fold one more die into an accumulated PMF
# ---------------------------------------------------------------------------


def combine_sum(acc: Sequence[float], sides: int) -> list[float]:
    """PMF of (acc variable + one fair die).

    Pr(S=z) is the mean of the window acc[z-sides+1 .. z], so a running
    window sum gives every entry in O(1).
    """
    n = len(acc)
    support = n + sides - 1
    out = [0.0] * support
    window = 0.0
    for z in range(support):
        if z < n:
            window += acc[z]
        if z >= sides:
            window -= acc[z - sides]
        out[z] = window / sides
    return out


def combine_max(acc: Sequence[float], sides: int) -> list[float]:
    """PMF of max(acc variable, one fair die).

    Pr(max=z) = Pr(A=z)·Pr(D<=z) + Pr(A<z)·Pr(D=z)
              = (acc[z]·z + Pr(A<=z)) / sides       (z within both supports)
    """
    n = len(acc)
    acc_cdf = cdf(acc)
    out: list[float] = []
    for z in range(max(n, sides)):
        if z < n and z < sides:
            out.append((acc[z] * z + acc_cdf[z]) / sides)
        elif z < n:
            # The die can no longer reach z.
            out.append(acc[z])
        else:
            out.append(1.0 / sides)
    return out


def combine_min(acc: Sequence[float], sides: int) -> list[float]:
    """PMF of min(acc variable, one fair die).

    Pr(min=z) = Pr(A=z)·Pr(D>=z) + Pr(A>z)·Pr(D=z)
              = (acc[z]·(sides-z-1) + Pr(A>=z)) / sides
    """
    acc_sig = ccdf(acc)
    return [
        (acc[z] * (sides - z - 1) + acc_sig[z]) / sides for z in range(min(len(acc), sides))
    ]


_COMBINATORS: dict[Aggregate, Callable[[Sequence[float], int], list[float]]] = {
    Aggregate.SUM: combine_sum,
    Aggregate.MIN: combine_min,
    Aggregate.MAX: combine_max,
}


# ---------------------------------------------------------------------------
# Count-in-set
# ---------------------------------------------------------------------------


def prob_in_set(sides: int, integer_set: IntegerSet) -> float:
    """Probability that one roll of a fair die lands in integer_set.

    Members above sides are unreachable; members below 1 are never rolled.
    """
    hits = integer_set.count_at_most(sides) - integer_set.count_at_most(0)
    return hits / sides


def binomial_pmf(count: int, p: float) -> list[float]:
    """Exact Binomial(count, p) PMF.

    Uses the multiplicative recurrence from (1-p)**count. When that seed
    falls below the smallest normal float, every term is computed from its
    log instead.
    """
    if p >= 1.0:
        return [0.0] * count + [1.0]
    if p <= 0.0:
        return [1.0] + [0.0] * count
    q = 1.0 - p
    seed = q**count
    if seed < sys.float_info.min:
        return _binomial_pmf_from_logs(count, p)
    out = [seed]
    for i in range(1, count + 1):
        out.append(out[-1] * p * (count - i + 1) / (i * q))
    return out


def _binomial_pmf_from_logs(count: int, p: float) -> list[float]:
    log_p = math.log(p)
    log_q = math.log1p(-p)
    log_n = math.lgamma(count + 1)
    return [
        math.exp(
            log_n
            - math.lgamma(i + 1)
            - math.lgamma(count - i + 1)
            + i * log_p
            + (count - i) * log_q
        )
        for i in range(count + 1)
    ]


def _in_set_pmf(groups: Sequence[DieGroup], integer_set: IntegerSet) -> list[float]:
    pmf = [1.0]
    for group in groups:
        pmf = convolve(pmf, binomial_pmf(group.count, prob_in_set(group.sides, integer_set)))
    return pmf


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def compute_pmf(
    aggregate: Aggregate, dice: DiceSpec, integer_set: IntegerSet | None = None
) -> list[float]:
    """Return the PMF of aggregate over dice.

    Args:
        aggregate: Statistic to compute.
        dice: Parsed dice. Must not be empty.
        integer_set: Target set; required for Aggregate.IN_SET.

    Returns:
        Probabilities indexed from the aggregate's minimum value.

    Raises:
        ValueError: If dice is empty, or IN_SET is asked for without a set.
    """
    if dice.is_empty:
        raise ValueError("Cannot compute a distribution over no dice")
    set_values: tuple[int, ...] = ()
    if aggregate is Aggregate.IN_SET:
        if integer_set is None:
            raise ValueError("Aggregate 'inset' requires an integer set")
        set_values = integer_set.values
    return list(_cached_pmf(aggregate, dice.groups, set_values))


@lru_cache(maxsize=256)
def _cached_pmf(
    aggregate: Aggregate, groups: tuple[DieGroup, ...], set_values: tuple[int, ...]
) -> tuple[float, ...]:
    if aggregate is Aggregate.IN_SET:
        return tuple(_in_set_pmf(groups, IntegerSet(values=set_values)))

    combine = _COMBINATORS[aggregate]
    first, *rest = groups
    acc = uniform_pmf(first.sides)
    for _ in range(first.count - 1):
        acc = combine(acc, first.sides)
    for group in rest:
        for _ in range(group.count):
            acc = combine(acc, group.sides)
    return tuple(acc)


def start_x(aggregate: Aggregate, dice: DiceSpec) -> int:
    """Smallest value the aggregate can take; the x of index 0."""
    if aggregate is Aggregate.SUM:
        return dice.min_roll
    if aggregate is Aggregate.IN_SET:
        return 0
    return 1


def compute_distribution(
    kind: DistKind | str,
    aggregate: Aggregate | str,
    dice_text: str,
    set_text: str | None = None,
) -> Distribution | None:
    """Parse, compute and derive the requested distribution.

    Args:
        kind: "pdf", "cdf" or "ccdf" (or the DistKind member).
        aggregate: "sum", "min", "max" or "inset" (or the Aggregate member).
        dice_text: Dice notation, e.g. "3d6, 1d20".
        set_text: Set notation; only read when aggregate is "inset".

    Returns:
        The Distribution, or None when there is nothing to plot: no dice were
        found, or the aggregate is "inset" and the set is empty.

    Raises:
        ValueError: If kind or aggregate is not a known value.

    Any dice or set text is accepted, but work and memory grow with the total
    number of faces, so a text such as "1d99999999999" can exhaust memory.
    Callers taking untrusted input should parse first, apply
    ``check_limits`` and call ``distribution_for`` with the parsed dice.
    """
    return distribution_for(kind, aggregate, parse_dice(dice_text or ""), set_text)


def distribution_for(
    kind: DistKind | str,
    aggregate: Aggregate | str,
    dice: DiceSpec,
    set_text: str | None = None,
) -> Distribution | None:
    """Like compute_distribution, for dice that are already parsed."""
    kind = DistKind(kind)
    aggregate = Aggregate(aggregate)

    if dice.is_empty:
        return None

    integer_set: IntegerSet | None = None
    label = dice.label
    if aggregate is Aggregate.IN_SET:
        if not set_text:
            return None
        integer_set = parse_integer_set(set_text)
        if integer_set.is_empty:
            return None
        label += integer_set.label

    pmf = compute_pmf(aggregate, dice, integer_set)
    if kind is DistKind.CDF:
        values = cdf(pmf)
    elif kind is DistKind.CCDF:
        values = ccdf(pmf)
    else:
        values = pmf

    logger.debug(
        "Computed %s of %s over %s (%d points)", kind.value, aggregate.value, label, len(values)
    )
    return Distribution(
        kind=kind,
        aggregate=aggregate,
        values=values,
        start_x=start_x(aggregate, dice),
        label=f"{aggregate.display_name}({label})",
    )


def summarize(distribution: Distribution) -> tuple[float, float]:
    """Return (mean, standard deviation) of a PDF distribution.

    CDF and CCDF distributions are converted back to a PMF first.
    """
    values = distribution.values
    if distribution.kind is DistKind.CDF:
        pmf = [b - a for a, b in zip([0.0, *values], values)]
    elif distribution.kind is DistKind.CCDF:
        pmf = [a - b for a, b in zip(values, [*values[1:], 0.0])]
    else:
        pmf = list(values)

    mean = sum(p * x for p, x in zip(pmf, distribution.xs))
    variance = sum(p * (x - mean) ** 2 for p, x in zip(pmf, distribution.xs))
    return mean, math.sqrt(max(variance, 0.0))
