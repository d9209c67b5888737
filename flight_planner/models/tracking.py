from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PriceHistoryPoint(BaseModel):
    """One observed price in the tracked window."""

    model_config = ConfigDict(extra="ignore")

    date: str = Field("", description="Observation date")
    week: int = Field(0, description="1-based week index")
    price: float = Field(0, description="Observed price")


class PriceAnalysis(BaseModel):
    """Aggregate price statistics over the tracked weeks."""

    model_config = ConfigDict(extra="ignore")

    min_price: float = 0
    avg_price: float = 0
    max_price: float = 0
    best_date: Optional[str] = None
    recommendation: Optional[str] = None
    data_points: list[PriceHistoryPoint] = Field(default_factory=list)
    track_weeks: int = 0

    @field_validator("data_points", mode="before")
    @classmethod
    def default_points(cls, value):
        return value or []

    @property
    def lowest_price(self) -> Optional[float]:
        """Minimum over the history points, shared by every tied point."""
        if not self.data_points:
            return None
        return min(point.price for point in self.data_points)

    def is_best(self, point: PriceHistoryPoint) -> bool:
        return self.lowest_price is not None and point.price == self.lowest_price
