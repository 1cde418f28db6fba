from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

TermStatus = Literal["normal", "low", "high", "borderline-high", "borderline-low", "abnormal"]


class TermRecord(BaseModel):
    """A lexicon entry. Immutable once loaded."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    key: str = Field(min_length=1)
    term: str = Field(min_length=1)
    simplified: str = Field(min_length=1)
    definition: str = Field(min_length=1)
    normal_range: Optional[str] = Field(default=None, alias="normalRange")

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class MatchedTerm(TermRecord):
    """A lexicon entry found in a report, with any value read next to it."""

    value: Optional[str] = None
    status: Optional[TermStatus] = None

    @classmethod
    def from_record(cls, record: TermRecord) -> "MatchedTerm":
        return cls(**record.model_dump())

