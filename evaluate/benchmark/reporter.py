"""
Report generation for evaluation results.
Supports plain-text blocks and JSON output.
"""

import os
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from .metrics import MetricSet
from .runner import EvaluationResult
from .utils import get_machine_info, get_report_subdir_name
from ..config import Config, METRIC_LABELS, NULL_MARKER

SEPARATOR = "-" * 40


def format_value(value: Any) -> str:
    """Natural representation of a metric, or the null marker."""
    if value is None:
        return NULL_MARKER
    return str(value)


def render_report(
    label: Optional[str],
    memory: Optional[float],
    duration: Optional[float],
    cost: Optional[float],
    properties: Optional[float],
    methods: Optional[float],
    count: Optional[float],
) -> str:
    """
    Format evaluation results as an 8-line plain-text block.
    
    Every metric line is printed whatever metric set was requested.
    
    Example:
        Evaluation for checkout
        ----------------------------------------
        Memory Usage: 1.25
        Execution Time: 40.113
        Execution Cost: 0.05
        Class Properties: N/A
        Class Methods: N/A
        Count: N/A
    """
    values = {
        "memory": memory,
        "duration": duration,
        "cost": cost,
        "properties": properties,
        "methods": methods,
        "count": count,
    }
    
    lines = [f"Evaluation for {label}" if label else "Evaluation", SEPARATOR]
    for key, title in METRIC_LABELS.items():
        lines.append(f"{title}: {format_value(values[key])}")
    
    return os.linesep.join(lines)


class Reporter:
    """
    Export evaluation results.
    
    Reports are organized by date and hostname:
        reports/YYYYMMDD_hostname/
    
    Example:
        reporter = Reporter()
        reporter.generate_json(result, label="checkout")
    """
    
    def __init__(self, output_dir: Optional[Path] = None):
        """
        Initialize reporter.
        
        Args:
            output_dir: Base directory for output files (default: Config.REPORT_DIR)
        """
        base_dir = output_dir or Config.REPORT_DIR
        
        # Create subdirectory with date_hostname format
        self.output_dir = base_dir / get_report_subdir_name()
        self.output_dir.mkdir(parents=True, exist_ok=True)
        
        # Cache machine info for this reporter instance
        self._machine_info = get_machine_info()
    
    def generate_json(
        self,
        result: EvaluationResult,
        label: Optional[str] = None,
        metrics: MetricSet = MetricSet.ALL,
        filename: Optional[str] = None,
    ) -> str:
        """
        Generate JSON evaluation results.
        
        Args:
            result: Evaluation result to export
            label: Evaluation label
            metrics: Metrics to include per target
            filename: Output filename (optional)
            
        Returns:
            Path to generated file
        """
        file_timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        
        if not filename:
            name = (label or "evaluation").replace(" ", "_")
            filename = f"evaluation_{name}_{file_timestamp}.json"
        
        output_path = self.output_dir / filename
        
        data = {
            "label": label,
            "generated_at": datetime.now().isoformat(),
            "metrics": metrics.keys(),
            "environment": self._machine_info,
            **result.to_dict(metrics),
        }
        
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        
        return str(output_path)
