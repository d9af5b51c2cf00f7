from legal_ai.analysis.completion import CompletionService
from legal_ai.analysis.factory import CompletionClientFactory
from legal_ai.analysis.kinds import ANALYSIS_PROFILES, AnalysisKind, AnalysisProfile
from legal_ai.analysis.prompt_builder import Prompt, PromptBuilder
from legal_ai.analysis.result_parser import parse_result

__all__ = [
    "ANALYSIS_PROFILES",
    "AnalysisKind",
    "AnalysisProfile",
    "CompletionClientFactory",
    "CompletionService",
    "Prompt",
    "PromptBuilder",
    "parse_result",
]
