"""Pydantic response models for the JSON API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from diceplot.distribution import Aggregate, DistKind, Distribution


class DistributionResponse(BaseModel):
    kind: DistKind
    aggregate: Aggregate
    values: list[float] = Field(description="PMF, CDF or CCDF values; values[0] is at start_x.")
    start_x: int = Field(description="x value of the first entry in values.")
    label: str = Field(description="Display label, e.g. 'Sum(3d6, 1d20)'.")
    y_axis_label: str
    y_axis_max: float | None = Field(
        default=None, description="1 for cumulative kinds; null when unbounded."
    )
    mean: float
    std_dev: float

    @classmethod
    def from_distribution(
        cls, distribution: Distribution, mean: float, std_dev: float
    ) -> DistributionResponse:
        return cls(
            kind=distribution.kind,
            aggregate=distribution.aggregate,
            values=distribution.values,
            start_x=distribution.start_x,
            label=distribution.label,
            y_axis_label=distribution.y_axis_label,
            y_axis_max=distribution.y_axis_max,
            mean=mean,
            std_dev=std_dev,
        )
