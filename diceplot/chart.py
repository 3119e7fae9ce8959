"""Highcharts options for distribution histograms.

The page look lives in a single ChartStyle built once at import time and passed
to every call. The template applies ``global_options()`` with
``Highcharts.setOptions`` and then draws each plot from ``chart_options()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from diceplot.distribution import Distribution


@dataclass(frozen=True, slots=True)
class ChartStyle:
    series_type: str = "column"
    # (offset, css colour) pairs for the chart background gradient.
    background_stops: tuple[tuple[float, str], ...] = (
        (0.0, "rgb(240, 240, 250)"),
        (1.0, "rgb(225, 225, 250)"),
    )
    background_gradient: tuple[int, int, int, int] = (-120, 600, 700, 80)
    border_width: int = 2
    plot_background_color: str = "rgba(255, 255, 255, .9)"
    plot_shadow: bool = True
    plot_border_width: int = 1
    # Histogram columns touch each other.
    column_point_padding: float = 0.0
    column_group_padding: float = 0.0
    column_border_width: int = 1
    column_shadow: bool = False
    show_in_legend: bool = False
    x_axis_title: str = "x"

    def global_options(self) -> dict[str, Any]:
        """Options shared by every plot on the page."""
        return {
            "chart": {
                "type": self.series_type,
                "backgroundColor": {
                    "linearGradient": list(self.background_gradient),
                    "stops": [list(stop) for stop in self.background_stops],
                },
                "borderWidth": self.border_width,
                "plotBackgroundColor": self.plot_background_color,
                "plotShadow": self.plot_shadow,
                "plotBorderWidth": self.plot_border_width,
            },
            "plotOptions": {
                "column": {
                    "pointPadding": self.column_point_padding,
                    "borderWidth": self.column_border_width,
                    "groupPadding": self.column_group_padding,
                    "shadow": self.column_shadow,
                },
                "series": {"showInLegend": self.show_in_legend},
            },
        }


DEFAULT_STYLE = ChartStyle()


def chart_options(distribution: Distribution, style: ChartStyle = DEFAULT_STYLE) -> dict[str, Any]:
    """Per-plot options for a single distribution."""
    y_axis: dict[str, Any] = {"title": {"text": distribution.y_axis_label}}
    if distribution.y_axis_max is not None:
        y_axis["max"] = distribution.y_axis_max

    return {
        "title": {"text": distribution.label},
        "xAxis": {"title": {"text": style.x_axis_title}},
        "yAxis": y_axis,
        "series": [
            {
                "name": distribution.y_axis_label,
                "pointStart": distribution.start_x,
                "data": distribution.values,
            }
        ],
    }
