"""Shared Jinja2 templates instance for all routers."""

from __future__ import annotations

from pathlib import Path

from fastapi.templating import Jinja2Templates
from jinja2 import Environment, FileSystemLoader, select_autoescape

from diceplot.chart import DEFAULT_STYLE
from diceplot.config import settings

_env = Environment(
    loader=FileSystemLoader(Path(__file__).parent / "templates"),
    autoescape=select_autoescape(["html", "xml"]),
)
_env.policies["json.dumps_kwargs"] = {"sort_keys": True, "ensure_ascii": False}
_env.globals["highcharts_url"] = settings.highcharts_url
_env.globals["chart_global_options"] = DEFAULT_STYLE.global_options()

templates = Jinja2Templates(env=_env)
