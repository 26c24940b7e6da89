"""Analysis provider: LLM-generated narrative for a questionnaire submission."""

from __future__ import annotations

from wellness_report.analysis.prompts import (
    DEMO_ANALYSIS,
    FALLBACK_ANALYSIS,
    SYSTEM_PROMPT,
    build_user_prompt,
)
from wellness_report.analysis.provider import AnalysisProvider, IAnalysisProvider, analyze_with_fallback

__all__ = [
    "AnalysisProvider",
    "DEMO_ANALYSIS",
    "FALLBACK_ANALYSIS",
    "IAnalysisProvider",
    "SYSTEM_PROMPT",
    "analyze_with_fallback",
    "build_user_prompt",
]
