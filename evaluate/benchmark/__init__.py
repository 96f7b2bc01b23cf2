"""
Evaluation execution and reporting package.
"""

from .runner import EvaluationRunner, EvaluationResult, RunnerConfig
from .metrics import MetricsCollector, MetricSet, AggregatedResult, Sample
from .reporter import Reporter, render_report

__all__ = [
    "EvaluationRunner",
    "EvaluationResult",
    "RunnerConfig",
    "MetricsCollector",
    "MetricSet",
    "AggregatedResult",
    "Sample",
    "Reporter",
    "render_report",
]
