"""Declarative table of analysis kinds.

Each kind names its prompt files, generation budget and the document
column its result is stored in. Kinds without a document column only run
against contract records. Adding a kind means adding a row here and two
prompt files under ``prompts/``.
"""

from dataclasses import dataclass
from enum import Enum


class AnalysisKind(str, Enum):
    CLAUSE_EXTRACTION = "clause_extraction"
    RISK_ASSESSMENT = "risk_assessment"
    COMPLIANCE_CHECK = "compliance_check"
    COMPREHENSIVE = "comprehensive"
    DOCUMENT_QA = "document_qa"
    SUMMARIZATION = "summarization"
    CONTRACT_COMPARISON = "contract_comparison"
    CONTRACT_REVIEW = "contract_review"


@dataclass(frozen=True)
class AnalysisProfile:
    kind: AnalysisKind
    prompt_name: str
    temperature: float
    max_tokens: int | None
    result_column: str | None
    structured: bool = True
    text_key: str = "analysis"
    requires_question: bool = False


ANALYSIS_PROFILES: dict[AnalysisKind, AnalysisProfile] = {
    AnalysisKind.CLAUSE_EXTRACTION: AnalysisProfile(
        kind=AnalysisKind.CLAUSE_EXTRACTION,
        prompt_name="clause_extraction",
        temperature=0.3,
        max_tokens=3000,
        result_column="ai_clause_extraction",
    ),
    AnalysisKind.RISK_ASSESSMENT: AnalysisProfile(
        kind=AnalysisKind.RISK_ASSESSMENT,
        prompt_name="risk_assessment",
        temperature=0.3,
        max_tokens=3000,
        result_column="ai_risk_assessment",
    ),
    AnalysisKind.COMPLIANCE_CHECK: AnalysisProfile(
        kind=AnalysisKind.COMPLIANCE_CHECK,
        prompt_name="compliance_check",
        temperature=0.3,
        max_tokens=3000,
        result_column="ai_compliance_check",
    ),
    AnalysisKind.COMPREHENSIVE: AnalysisProfile(
        kind=AnalysisKind.COMPREHENSIVE,
        prompt_name="comprehensive",
        temperature=0.3,
        max_tokens=3000,
        result_column="ai_comprehensive_analysis",
    ),
    AnalysisKind.CONTRACT_COMPARISON: AnalysisProfile(
        kind=AnalysisKind.CONTRACT_COMPARISON,
        prompt_name="contract_comparison",
        temperature=0.3,
        max_tokens=1500,
        result_column="ai_contract_comparison",
    ),
    AnalysisKind.CONTRACT_REVIEW: AnalysisProfile(
        kind=AnalysisKind.CONTRACT_REVIEW,
        prompt_name="contract_review",
        temperature=0.2,
        max_tokens=2000,
        result_column=None,
    ),
    AnalysisKind.DOCUMENT_QA: AnalysisProfile(
        kind=AnalysisKind.DOCUMENT_QA,
        prompt_name="document_qa",
        temperature=0.3,
        max_tokens=None,
        result_column="ai_document_qa",
        structured=False,
        text_key="answer",
        requires_question=True,
    ),
    AnalysisKind.SUMMARIZATION: AnalysisProfile(
        kind=AnalysisKind.SUMMARIZATION,
        prompt_name="summarization",
        temperature=0.3,
        max_tokens=None,
        result_column="ai_summary",
        structured=False,
        text_key="summary",
    ),
}

# Second pass of chunked summarization: merges per-chunk summaries.
SUMMARY_MERGE_PROMPT_NAME = "summary_merge"

DOCUMENT_KINDS = frozenset(
    kind for kind, profile in ANALYSIS_PROFILES.items() if profile.result_column is not None
)
CONTRACT_KINDS = frozenset({AnalysisKind.CONTRACT_REVIEW, AnalysisKind.CONTRACT_COMPARISON})


def profile_for(kind: AnalysisKind) -> AnalysisProfile:
    return ANALYSIS_PROFILES[kind]


def parse_kind(value: str) -> AnalysisKind:
    """Map a request's analysis type tag to an AnalysisKind.

    Raises:
        ValueError: if the tag is not one of the known kinds.
    """
    try:
        return AnalysisKind(value.strip().lower())
    except ValueError:
        supported = [k.value for k in AnalysisKind]
        raise ValueError(
            f"Unknown analysis type '{value}'. Choose from: {supported}"
        ) from None
