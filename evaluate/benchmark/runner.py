"""
Evaluation runner: dispatches targets to their measurement mode and
instruments each repetition.
"""

import gc
import time
import pickle
import logging
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Callable

from ..config import Config
from ..probes import MemoryProbe, ProcessProbe, get_probe
from ..targets import (
    EvaluationTarget,
    EvaluationMode,
    count_elements,
    count_methods,
    count_properties,
)
from .metrics import AggregatedResult, MetricSet, MetricsCollector, Sample
from .utils import elapsed_ms, elapsed_since_epoch_ms, format_memory, gc_suspended

logger = logging.getLogger(__name__)


@dataclass
class RunnerConfig:
    """Configuration for an evaluation run."""
    repetitions: int = 5
    
    # Epoch seconds at which the hosting process began (process mode only)
    process_start: Optional[float] = None
    
    def __post_init__(self):
        if self.repetitions < 1:
            raise ValueError(f"repetitions must be at least 1, got {self.repetitions}")


@dataclass
class EvaluationResult:
    """Result of a complete evaluation: one aggregate per target."""
    results: List[AggregatedResult] = field(default_factory=list)
    
    @property
    def is_process(self) -> bool:
        return len(self.results) == 1 and self.results[0].mode == EvaluationMode.PROCESS
    
    @property
    def last(self) -> Optional[AggregatedResult]:
        """The aggregate reflected in single-valued result slots."""
        return self.results[-1] if self.results else None
    
    def to_dict(self, metrics: MetricSet = MetricSet.ALL) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "results": [r.to_dict(metrics) for r in self.results],
        }


class EvaluationRunner:
    """
    Measures memory, duration and structure of evaluation targets.
    
    Features:
        - Work targets are invoked with automatic GC suspended
        - Value targets are deep-copied through a pickle round trip
        - No targets measures the hosting process instead
        - Per-sample and per-target callbacks
    
    Runs are strictly sequential. The memory probe's peak tracking is
    process-wide, so interleaving two runners corrupts both readings.
    
    Example:
        runner = EvaluationRunner(config=RunnerConfig(repetitions=10))
        result = runner.run(wrap_targets([build_index, payload]))
    """
    
    def __init__(
        self,
        probe: Optional[MemoryProbe] = None,
        config: Optional[RunnerConfig] = None,
        process_probe: Optional[ProcessProbe] = None,
    ):
        """
        Initialize evaluation runner.
        
        Args:
            probe: Memory probe for target measurements
            config: Runner configuration
            process_probe: Process reader for process mode
        """
        self.probe = probe or get_probe(Config.PROBE, Config.get_probe_config())
        self.config = config or RunnerConfig(repetitions=Config.REPETITIONS)
        self.process_probe = process_probe
        
        # Callbacks
        self._on_sample: Optional[Callable[[EvaluationTarget, Sample], None]] = None
        self._on_result: Optional[Callable[[AggregatedResult], None]] = None
    
    def on_sample(self, callback: Callable[[EvaluationTarget, Sample], None]) -> "EvaluationRunner":
        """
        Set sample callback.
        
        Args:
            callback: Function(target, sample) called after each repetition
        """
        self._on_sample = callback
        return self
    
    def on_result(self, callback: Callable[[AggregatedResult], None]) -> "EvaluationRunner":
        """
        Set result callback.
        
        Args:
            callback: Function(result) called once per target
        """
        self._on_result = callback
        return self
    
    def run(self, targets: List[EvaluationTarget]) -> EvaluationResult:
        """
        Evaluate targets.
        
        Any exception raised by a Work target or by the Value round trip
        propagates unchanged and aborts the whole run.
        
        Args:
            targets: Classified targets; empty evaluates the process
            
        Returns:
            EvaluationResult with one aggregate per target
        """
        result = EvaluationResult()
        
        if not targets:
            logger.info("No targets given, evaluating the process")
            collector = MetricsCollector("process", EvaluationMode.PROCESS, 1)
            collector.record(self.evaluate_process())
            result.results.append(self._finish(collector))
            return result
        
        repetitions = self.config.repetitions
        logger.info(f"Evaluating {len(targets)} target(s), {repetitions} repetition(s) each")
        
        with self.probe:
            for target in targets:
                mode = EvaluationMode.WORK if target.is_work else EvaluationMode.VALUE
                collector = MetricsCollector(target.name, mode, repetitions)
                
                for _ in range(repetitions):
                    if target.is_work:
                        sample = self.evaluate_work(target)
                    else:
                        sample = self.evaluate_value(target)
                    
                    collector.record(sample)
                    if self._on_sample:
                        self._on_sample(target, sample)
                
                result.results.append(self._finish(collector))
        
        return result
    
    def _finish(self, collector: MetricsCollector) -> AggregatedResult:
        aggregated = collector.calculate()
        logger.info(
            f"{aggregated.target}: memory={aggregated.memory}MB "
            f"duration={aggregated.duration}ms"
        )
        if self._on_result:
            self._on_result(aggregated)
        return aggregated
    
    def evaluate_process(self) -> Sample:
        """
        Measure the hosting process.
        
        Peak memory is the worst case since process start; duration runs from
        the process start timestamp until now.
        """
        process_probe = self.process_probe or ProcessProbe()
        process_start = self.config.process_start
        if process_start is None:
            process_start = Config.get_process_start()
        
        return {
            "memory": format_memory(process_probe.peak_memory()),
            "duration": elapsed_since_epoch_ms(process_start),
            "count": None,
            "properties": None,
            "methods": None,
        }
    
    def evaluate_work(self, target: EvaluationTarget) -> Sample:
        """
        Measure one invocation of a Work target.
        
        Returns:
            Sample with memory (peak delta, MB) and duration (ms)
        """
        gc.collect()
        
        # Reset the peak in case a previous evaluation left it high
        self.probe.reset_peak()
        start_memory = self.probe.current_peak()
        
        # No collection may free memory while the work runs
        with gc_suspended():
            start_time = time.perf_counter_ns()
            target.subject()
            duration = elapsed_ms(start_time)
            
            consumed_memory = self.probe.current_peak()
        
        return {
            "memory": format_memory(consumed_memory - start_memory),
            "duration": duration,
        }
    
    def evaluate_value(self, target: EvaluationTarget) -> Sample:
        """
        Measure a deep copy of a Value target and inspect its structure.
        
        Returns:
            Sample with memory, duration, count, properties and methods;
            counts that do not apply to the value are None
        """
        gc.collect()
        
        start_memory = self.probe.current_usage()
        
        # A serialization round trip forces a genuine allocation of the data
        start_time = time.perf_counter_ns()
        copy = pickle.loads(pickle.dumps(target.subject, protocol=pickle.HIGHEST_PROTOCOL))
        duration = elapsed_ms(start_time)
        
        consumed_memory = self.probe.current_usage()
        
        return {
            "memory": format_memory(consumed_memory - start_memory),
            "duration": duration,
            "count": count_elements(target.subject),
            "properties": count_properties(copy),
            "methods": count_methods(copy),
        }
