"""
Metrics collection and aggregation for evaluations.
"""

import logging
from dataclasses import dataclass
from enum import IntFlag
from typing import Dict, List, Any, Optional, Union

from ..targets import EvaluationMode

logger = logging.getLogger(__name__)

# One repetition's raw measurement: metric name -> value, None when the
# metric does not apply to the target
Sample = Dict[str, Optional[float]]

# Result slots filled from samples, in report order
RESULT_KEYS = ("memory", "duration", "properties", "methods", "count")


class MetricSet(IntFlag):
    """Metrics selected for display."""
    MEMORY = 1
    TIME = 2
    COST = 4
    OBJECT = 8
    BASIC = MEMORY | TIME | COST
    ALL = MEMORY | TIME | COST | OBJECT
    
    @classmethod
    def parse(cls, value: Union[str, int, "MetricSet"]) -> "MetricSet":
        """
        Parse a metric set from a flag, an int bitmask or a name list.
        
        Args:
            value: e.g. MetricSet.ALL, 3, "basic", "memory,time"
            
        Returns:
            MetricSet
            
        Raises:
            ValueError: If a name is unknown or the bitmask is out of range
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            if value < 0 or value & ~int(cls.ALL):
                raise ValueError(f"Invalid metric bitmask: {value}")
            return cls(value)
        
        result = cls(0)
        for name in str(value).split(","):
            name = name.strip().upper()
            if not name:
                continue
            if name not in cls.__members__:
                available = ", ".join(m.lower() for m in cls.__members__)
                raise ValueError(f"Unknown metric: {name.lower()}. Available: {available}")
            result |= cls[name]
        return result
    
    def keys(self) -> List[str]:
        """Result keys shown for this selection, in report order."""
        keys = []
        if self & MetricSet.MEMORY:
            keys.append("memory")
        if self & MetricSet.TIME:
            keys.append("duration")
        if self & MetricSet.COST:
            keys.append("cost")
        if self & MetricSet.OBJECT:
            keys.extend(["properties", "methods", "count"])
        return keys


def compute_cost(memory: Optional[float], duration: Optional[float]) -> Optional[float]:
    """Synthetic cost score: memory (MB) x duration (ms) / 1000."""
    if memory is None or duration is None:
        return None
    return round(memory * duration / 1000, 3)


@dataclass
class AggregatedResult:
    """
    Averaged metrics for a single target.
    
    A None metric did not apply to the target (or was missing in at least
    one repetition); it is never reported as zero.
    """
    # Identification
    target: str = ""
    mode: EvaluationMode = EvaluationMode.VALUE
    repetitions: int = 0
    
    # Resource metrics (MB and ms)
    memory: Optional[float] = None
    duration: Optional[float] = None
    
    # Structural metrics
    properties: Optional[float] = None
    methods: Optional[float] = None
    count: Optional[float] = None
    
    @property
    def cost(self) -> Optional[float]:
        return compute_cost(self.memory, self.duration)
    
    def to_dict(self, metrics: MetricSet = MetricSet.ALL) -> Dict[str, Any]:
        """Convert to dictionary for serialization, keeping selected metrics only."""
        data = {
            "target": self.target,
            "mode": self.mode.value,
            "repetitions": self.repetitions,
        }
        for key in metrics.keys():
            data[key] = getattr(self, key)
        return data


class MetricsCollector:
    """
    Collects per-repetition samples for one target and averages them.
    
    Usage:
        collector = MetricsCollector("build_index", EvaluationMode.WORK, 5)
        
        for _ in range(5):
            collector.record(measure_once())
        
        result = collector.calculate()
    """
    
    def __init__(self, target: str, mode: EvaluationMode, repetitions: int):
        """
        Initialize metrics collector.
        
        Args:
            target: Target name
            mode: Evaluation mode the samples come from
            repetitions: Divisor for the averages
        """
        self.target = target
        self.mode = mode
        self.repetitions = repetitions
        
        self.samples: List[Sample] = []
    
    def record(self, sample: Sample) -> None:
        """Record a single repetition's sample."""
        self.samples.append(sample)
        logger.debug(f"{self.target} sample {len(self.samples)}: {sample}")
    
    def totals(self) -> Dict[str, Optional[float]]:
        """
        Sum samples per metric.
        
        A None for a metric in any sample makes that metric's sum None for
        good, whatever the other samples hold.
        """
        sums: Dict[str, Optional[float]] = {}
        for sample in self.samples:
            for key, value in sample.items():
                if value is None or (key in sums and sums[key] is None):
                    sums[key] = None
                else:
                    sums[key] = sums.get(key, 0) + value
        return sums
    
    def calculate(self) -> AggregatedResult:
        """
        Calculate averaged metrics.
        
        Returns:
            AggregatedResult with every applicable metric divided by the
            repetition count
        """
        averages = {
            key: None if total is None else total / self.repetitions
            for key, total in self.totals().items()
        }
        
        return AggregatedResult(
            target=self.target,
            mode=self.mode,
            repetitions=self.repetitions,
            **{key: averages.get(key) for key in RESULT_KEYS},
        )
