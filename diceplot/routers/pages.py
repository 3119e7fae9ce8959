from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from diceplot.chart import DEFAULT_STYLE, chart_options
from diceplot.config import settings
from diceplot.dependencies import PlotQuery, get_plot_query, resolve_distribution
from diceplot.dice import DiceLimitError
from diceplot.distribution import Aggregate, DistKind, summarize
from diceplot.rendering import templates

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def index(request: Request, query: PlotQuery = Depends(get_plot_query)) -> HTMLResponse:
    dice_text = settings.default_dice if query.dice is None else query.dice
    context = {
        "kinds": list(DistKind),
        "aggregates": list(Aggregate),
        "kind": query.kind,
        "aggregate": query.aggregate,
        "dice": dice_text,
        "set_text": query.set_text,
        "error": None,
        "chart": None,
        "summary": None,
    }

    try:
        distribution = resolve_distribution(query, dice_text)
    except DiceLimitError as exc:
        logger.info("Rejected dice %r: %s", dice_text, exc)
        context["error"] = str(exc)
        return templates.TemplateResponse(request, "index.html", context, status_code=422)

    if distribution is not None:
        context["chart"] = chart_options(distribution, DEFAULT_STYLE)
        context["summary"] = summarize(distribution)
    return templates.TemplateResponse(request, "index.html", context)
