"""Signal analysis - indicators, decision scoring and opportunity selection."""

from src.analysis.decision import DecisionEngine, TrendResult
from src.analysis.indicators import IndicatorSnapshot, compute_indicators
from src.analysis.opportunity import OpportunitySelector
from src.analysis.pipeline import Analysis, SignalPipeline, build_pipeline

__all__ = [
    "Analysis",
    "DecisionEngine",
    "IndicatorSnapshot",
    "OpportunitySelector",
    "SignalPipeline",
    "TrendResult",
    "build_pipeline",
    "compute_indicators",
]
