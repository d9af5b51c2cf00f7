"""Request and response bodies for the HTTP API (camelCase on the wire)."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class AnalyzeRequest(_CamelModel):
    document_id: int | None = Field(default=None, alias="documentId")
    analysis_type: str | None = Field(default=None, alias="analysisType")
    question: str | None = None


class DocumentQuestionRequest(_CamelModel):
    document_id: int | None = Field(default=None, alias="documentId")
    question: str | None = None


class AnalyzeResponse(_CamelModel):
    success: bool = True
    analysis_type: str = Field(alias="analysisType")
    result: dict[str, Any]
    document_id: int | None = Field(default=None, alias="documentId")
    timestamp: datetime


class AnswerResponse(_CamelModel):
    answer: str
    question: str
    document_id: int | None = Field(default=None, alias="documentId")
    timestamp: datetime


class SummaryResponse(_CamelModel):
    summary: str
    timestamp: datetime
    extraction: dict[str, Any] | None = None


class StoredAnalysisResponse(_CamelModel):
    document_id: int = Field(alias="documentId")
    analysis_type: str = Field(alias="analysisType")
    status: str
    result: dict[str, Any] | None = None
    last_analyzed: datetime | None = Field(default=None, alias="lastAnalyzed")
    analysis_version: str | None = Field(default=None, alias="analysisVersion")
    gpt_queries: int = Field(default=0, alias="gptQueries")


class ContractAnalysisResponse(_CamelModel):
    message: str = "Contract analysis completed successfully"
    contract_id: int = Field(alias="contractId")
    analysis: dict[str, Any]
    timestamp: datetime


class ContractComparisonResponse(_CamelModel):
    message: str = "Contract comparison completed"
    contract_id: int = Field(alias="contractId")
    comparison: dict[str, Any]
    timestamp: datetime
