"""
Utility functions for benchmark module.
Separated to avoid circular imports.
"""

import gc
import os
import socket
import platform
import time
from contextlib import contextmanager
from datetime import datetime
from typing import Dict, Iterator

BYTES_PER_MB = 1024 * 1024


def format_memory(memory: int) -> float:
    """
    Convert a byte count to megabytes.
    
    Args:
        memory: Memory in bytes
        
    Returns:
        Memory in MB, rounded to 2 decimals
    """
    return round(memory / BYTES_PER_MB, 2)


def elapsed_ms(start_ns: int) -> float:
    """
    Milliseconds elapsed since a perf_counter_ns() reading.
    
    Args:
        start_ns: Start timestamp in nanoseconds
        
    Returns:
        Duration in ms, rounded to 3 decimals
    """
    return round((time.perf_counter_ns() - start_ns) / 1e6, 3)


def elapsed_since_epoch_ms(start: float) -> float:
    """Milliseconds elapsed since a wall-clock timestamp in epoch seconds."""
    return round((time.time() - start) * 1e3, 3)


@contextmanager
def gc_suspended() -> Iterator[None]:
    """
    Disable automatic garbage collection for the enclosed block.
    
    The previous collector state is restored on exit, including when the
    block raises.
    """
    was_enabled = gc.isenabled()
    gc.disable()
    try:
        yield
    finally:
        if was_enabled:
            gc.enable()


def get_machine_info() -> Dict[str, str]:
    """
    Get machine information for report context.
    
    Returns:
        Dictionary with machine details including:
        - hostname: Machine hostname
        - platform: OS platform info
        - python: Interpreter implementation and version
        - cpu_count: Logical CPU count
        - pid: Current process id
    """
    return {
        "hostname": socket.gethostname(),
        "platform": f"{platform.system()} {platform.release()}",
        "python": f"{platform.python_implementation()} {platform.python_version()}",
        "cpu_count": str(os.cpu_count() or "unknown"),
        "pid": str(os.getpid()),
    }


def get_report_subdir_name() -> str:
    """
    Generate report subdirectory name based on date and hostname.
    
    Format: YYYYMMDD_hostname
    Example: 20251224_build-agent-3
    
    Returns:
        Subdirectory name string
    """
    date_str = datetime.now().strftime("%Y%m%d")
    hostname = socket.gethostname().replace("_", "-")
    
    return f"{date_str}_{hostname}"
