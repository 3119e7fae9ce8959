"""FastAPI dependencies for diceplot."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import Query

from diceplot.config import settings
from diceplot.dice import check_limits, parse_dice
from diceplot.distribution import Aggregate, DistKind, Distribution, distribution_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PlotQuery:
    kind: DistKind
    aggregate: Aggregate
    # None means the caller did not send the parameter at all.
    dice: str | None
    set_text: str


def get_plot_query(
    kind: DistKind = Query(DistKind.PDF),
    aggregate: Aggregate = Query(Aggregate(settings.default_aggregate)),
    dice: str | None = Query(None, max_length=1000),
    set_text: str = Query("", alias="set", max_length=1000),
) -> PlotQuery:
    return PlotQuery(kind=kind, aggregate=aggregate, dice=dice, set_text=set_text)


def resolve_distribution(query: PlotQuery, dice_text: str) -> Distribution | None:
    """Compute the distribution a request asks for.

    Returns None when there is nothing to plot.

    Raises:
        DiceLimitError: If the dice exceed the configured request limits.
    """
    dice = parse_dice(dice_text)
    check_limits(dice, max_dice=settings.max_dice, max_sides=settings.max_sides)
    return distribution_for(query.kind, query.aggregate, dice, query.set_text)
