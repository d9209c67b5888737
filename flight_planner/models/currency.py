from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ConversionRequest(BaseModel):
    amount: float = Field(gt=0)
    from_currency: str
    to_currency: str


class ConversionResult(BaseModel):
    model_config = ConfigDict(extra="ignore")

    original_amount: float
    from_currency: str
    converted_amount: float
    to_currency: str
    exchange_rate: float = Field(gt=0)
    last_updated: Optional[str] = None

    @property
    def reverse_rate(self) -> float:
        return 1 / self.exchange_rate
