"""Dice and integer-set notation parsing.

Dice notation is a free-text list of ``NdM`` tokens: ``3d6, 1d20``,
``2d8 + d4``. Anything that is not a token is ignored, an omitted count means
one die, and matching is case-insensitive.

Set notation mixes bare integers and inclusive ranges: ``1-3, 6``.

Neither parser raises. Text that contains nothing usable yields an empty
result, and callers decide whether an empty result is worth plotting.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_DIE_RE = re.compile(r"(?P<count>\d*)d(?P<sides>\d+)", re.IGNORECASE)
_RANGE_RE = re.compile(r"(?P<lo>\d+)-(?P<hi>\d+)")
_INT_RE = re.compile(r"\d+")


class DiceLimitError(ValueError):
    """Raised when a dice spec asks for more dice or sides than allowed."""


@dataclass(frozen=True, slots=True)
class DieGroup:
    count: int
    sides: int

    def __str__(self) -> str:
        return f"{self.count}d{self.sides}"


@dataclass(frozen=True, slots=True)
class DiceSpec:
    groups: tuple[DieGroup, ...] = ()
    min_roll: int = 0
    max_roll: int = 0
    label: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.groups

    @property
    def num_dice(self) -> int:
        return sum(g.count for g in self.groups)


@dataclass(frozen=True, slots=True)
class IntegerSet:
    values: tuple[int, ...] = ()
    # Presentation only, e.g. " {1-2, 6}".
    label: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.values

    def count_at_most(self, n: int) -> int:
        """Return how many members are <= n."""
        return sum(1 for v in self.values if v <= n)


def parse_dice(text: str) -> DiceSpec:
    """Parse dice notation into a DiceSpec.

    Args:
        text: Free text containing ``NdM`` tokens, e.g. "3d6 + d20".

    Returns:
        DiceSpec with one DieGroup per token, in input order. Tokens with a
        zero count or zero sides are skipped. Empty if nothing matched.
    """
    groups: list[DieGroup] = []
    min_roll = 0
    max_roll = 0

    for m in _DIE_RE.finditer(text):
        count = int(m.group("count") or 1)
        sides = int(m.group("sides"))
        if count < 1 or sides < 1:
            continue
        groups.append(DieGroup(count=count, sides=sides))
        min_roll += count
        max_roll += count * sides

    return DiceSpec(
        groups=tuple(groups),
        min_roll=min_roll,
        max_roll=max_roll,
        label=", ".join(str(g) for g in groups),
    )


def parse_integer_set(text: str) -> IntegerSet:
    """Parse set notation into a sorted, deduplicated IntegerSet.

    Ranges are expanded first; a range with lo > hi is dropped. Bare integers
    are then read from whatever text the ranges did not consume.
    """
    seen: set[int] = set()

    for m in _RANGE_RE.finditer(text):
        lo = int(m.group("lo"))
        hi = int(m.group("hi"))
        if lo > hi:
            continue
        seen.update(range(lo, hi + 1))

    remainder = _RANGE_RE.sub(" ", text)
    seen.update(int(tok) for tok in _INT_RE.findall(remainder))

    return IntegerSet(values=tuple(sorted(seen)), label=f" {{{text}}}")


def check_limits(spec: DiceSpec, *, max_dice: int, max_sides: int) -> None:
    """Reject specs too large to compute within a single request.

    Raises:
        DiceLimitError: If the spec rolls more than max_dice dice in total or
            any group has more than max_sides sides.
    """
    if spec.num_dice > max_dice:
        raise DiceLimitError(f"Too many dice: {spec.num_dice} (max {max_dice})")
    for group in spec.groups:
        if group.sides > max_sides:
            raise DiceLimitError(f"Too many sides: {group.sides} (max {max_sides})")
