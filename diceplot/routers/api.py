"""JSON API: distributions over dice aggregates."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from diceplot.dependencies import PlotQuery, get_plot_query, resolve_distribution
from diceplot.dice import DiceLimitError
from diceplot.distribution import summarize
from diceplot.schemas import DistributionResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.get(
    "/distribution",
    response_model=DistributionResponse,
    responses={204: {"description": "Nothing to plot: no dice, or an empty target set."}},
)
async def get_distribution(
    query: PlotQuery = Depends(get_plot_query),
) -> DistributionResponse | Response:
    try:
        distribution = resolve_distribution(query, query.dice or "")
    except DiceLimitError as exc:
        logger.info("Rejected dice %r: %s", query.dice, exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    if distribution is None:
        return Response(status_code=204)

    mean, std_dev = summarize(distribution)
    return DistributionResponse.from_distribution(distribution, mean, std_dev)
