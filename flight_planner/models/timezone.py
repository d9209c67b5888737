from pydantic import BaseModel, ConfigDict, Field


class TimeDifference(BaseModel):
    """Offset of ``to`` relative to ``from``, in hours."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    from_zone: str = Field(alias="from")
    to_zone: str = Field(alias="to")
    diff: float = 0
    diff_str: str = Field("", alias="diffStr")

    @property
    def is_faster(self) -> bool:
        return self.diff > 0

    @property
    def sign(self) -> str:
        return "+" if self.diff >= 0 else "-"
