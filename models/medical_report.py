from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.medical_term import MatchedTerm


class ProcessReportRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    original_text: str = Field(alias="originalText")
    is_anonymized: bool = Field(default=False, alias="isAnonymized")
    user_id: Optional[int] = Field(default=None, alias="userId", strict=True)
    language: str = "en"

    @field_validator("original_text")
    @classmethod
    def text_required(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Report text is required")
        return value


class ProcessedReport(BaseModel):
    """Output of one processing call: the terms found and the rewritten text."""

    model_config = ConfigDict(populate_by_name=True)

    identified_terms: List[MatchedTerm] = Field(default_factory=list, alias="identifiedTerms")
    simplified_text: str = Field(default="", alias="simplifiedText")


class MedicalReport(BaseModel):
    """A processed report as kept by the report storage."""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = None
    user_id: Optional[int] = Field(default=None, alias="userId")
    original_text: str = Field(alias="originalText")
    simplified_text: str = Field(alias="simplifiedText")
    identified_terms: List[MatchedTerm] = Field(default_factory=list, alias="identifiedTerms")
    created_at: str = Field(alias="createdAt")
    is_anonymized: bool = Field(default=False, alias="isAnonymized")
    language: str = "en"

    def to_json(self) -> dict:
        data = self.model_dump(by_alias=True, exclude={"identified_terms"})
        data["identifiedTerms"] = [term.to_json() for term in self.identified_terms]
        if data["id"] is None:
            del data["id"]
        return data
