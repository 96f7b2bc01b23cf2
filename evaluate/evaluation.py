"""
Evaluate: configure, run and report a micro-benchmark.

Usage:
    from evaluate import Evaluate, MetricSet

    Evaluate(build_index, label="index").to_stdout()

    with Evaluate([payload], metrics=MetricSet.ALL) as evaluation:
        evaluation.with_repetitions(10)
    # no terminating action was called, so the report is logged on exit
"""

import logging
from enum import Enum
from typing import Any, List, Optional, Union

from rich.console import Console

from .config import Config
from .exceptions import InvalidTerminatingAction, ReportAlreadyEmitted
from .probes import MemoryProbe
from .targets import EvaluationTarget, wrap_targets
from .benchmark.metrics import RESULT_KEYS, AggregatedResult, MetricSet, compute_cost
from .benchmark.reporter import render_report
from .benchmark.runner import EvaluationRunner, RunnerConfig

logger = logging.getLogger(__name__)


class TerminatingAction(Enum):
    """Where a rendered report is sent."""
    DEBUG = "debug"     # stderr, then halt
    LOG = "log"         # info log record
    STDOUT = "stdout"   # console dump
    
    @classmethod
    def parse(cls, action: Union[str, "TerminatingAction"]) -> "TerminatingAction":
        """
        Resolve an action or one of its names ('dd', 'debug', 'log', 'dump', 'stdout').
        
        Raises:
            InvalidTerminatingAction: If the name is unknown
        """
        if isinstance(action, cls):
            return action
        
        name = str(action).lower()
        aliases = {"dd": cls.DEBUG, "dump": cls.STDOUT}
        if name in aliases:
            return aliases[name]
        for member in cls:
            if member.value == name:
                return member
        
        raise InvalidTerminatingAction(f"Method {action} does not exist.")


class Evaluate:
    """
    Evaluation of zero or more targets.
    
    Construction only stores configuration; nothing is measured until run()
    or a terminating action is called. Every run re-measures and overwrites
    the result slots.
    
    Result slots hold the averages of the last target. With more than one
    target, `results` keeps one aggregate per target in input order.
    
    Exactly one terminating action (to_debug, to_log, to_stdout) may be
    invoked. If none was, finalize() logs the report; the context manager
    calls it on a clean exit. Without either, no report is produced.
    """
    
    def __init__(
        self,
        targets: Any = None,
        metrics: Union[MetricSet, int, str, None] = None,
        label: Optional[str] = None,
        repetitions: Optional[int] = None,
        probe: Optional[MemoryProbe] = None,
        process_start: Optional[float] = None,
    ):
        """
        Create a new evaluation.
        
        Args:
            targets: None (evaluate the process), a list of targets, or a
                single callable or value
            metrics: Metrics to display (default: Config.METRICS)
            label: Name shown in the report header
            repetitions: Measurements per target (default: Config.REPETITIONS)
            probe: Memory probe (default: Config.PROBE)
            process_start: Process start in epoch seconds, for process mode
        """
        self.targets: List[EvaluationTarget] = wrap_targets(targets)
        self.metrics = MetricSet.parse(Config.METRICS if metrics is None else metrics)
        self.label = label
        self.repetitions = Config.REPETITIONS if repetitions is None else repetitions
        self.probe = probe
        self.process_start = process_start
        
        self._validate_repetitions(self.repetitions)
        
        # Result slots, None until run()
        self.memory: Optional[float] = None
        self.duration: Optional[float] = None
        self.properties: Optional[float] = None
        self.methods: Optional[float] = None
        self.count: Optional[float] = None
        self.results: List[AggregatedResult] = []
        
        self._emitted: Optional[TerminatingAction] = None
    
    @classmethod
    def measure(
        cls,
        targets: Any = None,
        metrics: Union[MetricSet, int, str, None] = None,
        label: Optional[str] = None,
        repetitions: Optional[int] = None,
    ) -> "Evaluate":
        """Create a new evaluation."""
        return cls(targets, metrics=metrics, label=label, repetitions=repetitions)
    
    # ==========================================================================
    # Configuration
    # ==========================================================================
    
    def with_repetitions(self, repetitions: int) -> "Evaluate":
        self._validate_repetitions(repetitions)
        self.repetitions = repetitions
        return self
    
    def with_metrics(self, metrics: Union[MetricSet, int, str]) -> "Evaluate":
        self.metrics = MetricSet.parse(metrics)
        return self
    
    def with_label(self, label: Optional[str]) -> "Evaluate":
        self.label = label
        return self
    
    def has_label(self) -> bool:
        return bool(self.label)
    
    @staticmethod
    def _validate_repetitions(repetitions: int) -> None:
        if not isinstance(repetitions, int) or repetitions < 1:
            raise ValueError(f"repetitions must be a positive integer, got {repetitions!r}")
    
    # ==========================================================================
    # Measurement
    # ==========================================================================
    
    def run(self) -> "Evaluate":
        """
        Measure every target and publish the averages.
        
        If a target raises, the exception propagates and the result slots
        keep their previous values.
        """
        runner = EvaluationRunner(
            probe=self.probe,
            config=RunnerConfig(
                repetitions=self.repetitions,
                process_start=self.process_start,
            ),
        )
        result = runner.run(self.targets)
        
        self.results = result.results
        for key in RESULT_KEYS:
            setattr(self, key, getattr(result.last, key))
        
        return self
    
    def get_memory(self) -> Optional[float]:
        """Average memory in MB."""
        return self.memory
    
    def get_duration(self) -> Optional[float]:
        """Average duration in ms."""
        return self.duration
    
    def get_cost(self) -> Optional[float]:
        """memory * duration / 1000, rounded to 3 decimals; None if either is missing."""
        return compute_cost(self.memory, self.duration)
    
    def get_properties(self) -> Optional[float]:
        return self.properties
    
    def get_methods(self) -> Optional[float]:
        return self.methods
    
    def get_count(self) -> Optional[float]:
        return self.count
    
    def report(self) -> str:
        """Render the current result slots."""
        return render_report(
            self.label,
            self.memory,
            self.duration,
            self.get_cost(),
            self.properties,
            self.methods,
            self.count,
        )
    
    # ==========================================================================
    # Terminating actions
    # ==========================================================================
    
    def terminate(self, action: Union[str, TerminatingAction]) -> "Evaluate":
        """
        Run, render and send the report to the named sink.
        
        Raises:
            InvalidTerminatingAction: If the action is unknown
            ReportAlreadyEmitted: If a terminating action already ran
        """
        action = TerminatingAction.parse(action)
        if self._emitted is not None:
            raise ReportAlreadyEmitted(
                f"Report already emitted via {self._emitted.value}"
            )
        
        self.run()
        report = self.report()
        self._emitted = action
        
        if action == TerminatingAction.DEBUG:
            Console(stderr=True).print(report, markup=False, highlight=False, emoji=False, soft_wrap=True)
            raise SystemExit(1)
        elif action == TerminatingAction.LOG:
            logging.getLogger(Config.LOGGER_NAME).info(report)
        else:
            Console().print(report, markup=False, highlight=False, emoji=False, soft_wrap=True)
        
        return self
    
    def to_debug(self) -> None:
        """Dump the report to stderr and halt."""
        self.terminate(TerminatingAction.DEBUG)
    
    def to_log(self) -> "Evaluate":
        return self.terminate(TerminatingAction.LOG)
    
    def to_stdout(self) -> "Evaluate":
        return self.terminate(TerminatingAction.STDOUT)
    
    @property
    def emitted(self) -> bool:
        return self._emitted is not None
    
    def finalize(self) -> None:
        """Log the report unless a terminating action already emitted it."""
        if self._emitted is None:
            logger.debug("No terminating action invoked, logging report on finalize")
            self.to_log()
    
    def __enter__(self) -> "Evaluate":
        return self
    
    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.finalize()
    
    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__}(label={self.label!r}, "
            f"targets={len(self.targets)}, repetitions={self.repetitions})>"
        )


def measure(
    targets: Any = None,
    metrics: Union[MetricSet, int, str, None] = None,
    label: Optional[str] = None,
    repetitions: Optional[int] = None,
) -> Evaluate:
    """Create a new evaluation."""
    return Evaluate.measure(targets, metrics=metrics, label=label, repetitions=repetitions)


def dd(targets: Any = None, metrics=None, label: Optional[str] = None, repetitions: Optional[int] = None) -> None:
    """Evaluate, dump the report to stderr and halt."""
    measure(targets, metrics, label, repetitions).to_debug()


def log(targets: Any = None, metrics=None, label: Optional[str] = None, repetitions: Optional[int] = None) -> Evaluate:
    """Evaluate and log the report."""
    return measure(targets, metrics, label, repetitions).to_log()


def dump(targets: Any = None, metrics=None, label: Optional[str] = None, repetitions: Optional[int] = None) -> Evaluate:
    """Evaluate and print the report."""
    return measure(targets, metrics, label, repetitions).to_stdout()
