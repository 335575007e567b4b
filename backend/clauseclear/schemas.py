from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ModelReply(BaseModel):
    """Base for records decoded from model output; null fields take their defaults."""

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class SimplifiedClause(ModelReply):
    original: str = Field("", description="Clause text as written in the contract")
    simplified: str = Field("", description="Plain-language rewrite")
    explanation: str = Field("", description="What the clause means for the reader")


class ClauseList(ModelReply):
    clauses: list[SimplifiedClause] = Field(default_factory=list)


class RiskItem(ModelReply):
    clause: str = Field("", description="The specific text or clause")
    risk_type: str = Field("", description="Category of risk, e.g. financial or legal")
    reason: str = Field("", description="Why this may be concerning")
    severity: str = Field("", description="low, medium, or high")


class RiskReport(ModelReply):
    risks: list[RiskItem] = Field(default_factory=list)


class FairnessAssessment(ModelReply):
    fairness_score: float = Field(0, description="How balanced the contract is")
    favored_party: str = Field("N/A")
    reason: str = Field("Could not be determined.")


class LawyerAnswer(ModelReply):
    advice: str = ""
    reasoning: str = ""


class AskLawyerRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    contract_text: str = Field("", alias="contractText")
    user_question: str = Field("", alias="userQuestion")


class AnalysisResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    simplified_clauses: list[SimplifiedClause] = Field(default_factory=list, alias="simplifiedClauses")
    risks: list[RiskItem] = Field(default_factory=list)
    fairness: FairnessAssessment = Field(default_factory=FairnessAssessment)


class AnalyzeResponse(AnalysisResult):
    filename: str
    char_count: int = Field(..., alias="charCount")


class ExtractResponse(BaseModel):
    filename: str
    characters: int
    preview: str
