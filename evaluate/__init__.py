"""
Evaluate - micro-benchmarks for callables and data values.

Measures memory, duration and, for data, member and element counts,
averaged over repeated runs.
"""

from .evaluation import Evaluate, TerminatingAction, measure, dd, log, dump
from .exceptions import (
    EvaluateError,
    InvalidTerminatingAction,
    ReportAlreadyEmitted,
    ProbeError,
    UnknownProbeError,
)
from .targets import EvaluationTarget, EvaluationMode, TargetKind, Introspectable
from .benchmark import AggregatedResult, EvaluationRunner, MetricSet, render_report

__version__ = "1.0.0"

__all__ = [
    "Evaluate",
    "TerminatingAction",
    "measure",
    "dd",
    "log",
    "dump",
    "EvaluateError",
    "InvalidTerminatingAction",
    "ReportAlreadyEmitted",
    "ProbeError",
    "UnknownProbeError",
    "EvaluationTarget",
    "EvaluationMode",
    "TargetKind",
    "Introspectable",
    "AggregatedResult",
    "EvaluationRunner",
    "MetricSet",
    "render_report",
]
