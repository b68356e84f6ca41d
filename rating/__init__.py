# Rating estimate and summaries
from .performance import PerformanceEstimator
from .summary import SummaryFormatter

__all__ = ["PerformanceEstimator", "SummaryFormatter"]
