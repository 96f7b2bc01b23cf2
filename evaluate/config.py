"""
Configuration management for Evaluate.
Loads settings from environment variables and .env file.
"""

import os
from pathlib import Path
from typing import Dict, Any
from dotenv import load_dotenv

from .probes.process import ProcessProbe

# Load .env file from project root
PROJECT_ROOT = Path(__file__).parent.parent
load_dotenv(PROJECT_ROOT / ".env")


class Config:
    """Central configuration management."""
    
    # ==========================================================================
    # Evaluation Settings
    # ==========================================================================
    REPETITIONS: int = int(os.getenv("EVALUATE_REPETITIONS", "5"))
    METRICS: str = os.getenv("EVALUATE_METRICS", "basic")
    PROBE: str = os.getenv("EVALUATE_PROBE", "rss")
    LOGGER_NAME: str = os.getenv("EVALUATE_LOGGER", "evaluate")
    
    # Output directories
    REPORT_DIR: Path = PROJECT_ROOT / os.getenv("REPORT_DIR", "reports")
    
    # ==========================================================================
    # Process Mode
    # ==========================================================================
    
    @classmethod
    def get_process_start(cls) -> float:
        """
        Get the timestamp (seconds since epoch) at which the hosting process began.
        
        EVALUATE_PROCESS_START overrides the value reported by the OS.
        """
        override = os.getenv("EVALUATE_PROCESS_START", "")
        if override:
            return float(override)
        
        return ProcessProbe().start_time()
    
    @classmethod
    def get_probe_config(cls) -> Dict[str, Any]:
        """Get memory probe configuration."""
        return {
            "name": cls.PROBE,
            "trace_frames": int(os.getenv("EVALUATE_TRACE_FRAMES", "1")),
        }
    
    @classmethod
    def ensure_directories(cls):
        """Create output directories if they don't exist."""
        cls.REPORT_DIR.mkdir(parents=True, exist_ok=True)


# Report line labels, in rendering order (result slot -> display label)
METRIC_LABELS = {
    "memory": "Memory Usage",
    "duration": "Execution Time",
    "cost": "Execution Cost",
    "properties": "Class Properties",
    "methods": "Class Methods",
    "count": "Count",
}


# Marker printed for metrics that do not apply to the evaluated target
NULL_MARKER = "N/A"
