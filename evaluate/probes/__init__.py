"""
Memory probe package.
Each probe implements the MemoryProbe interface.
"""

from typing import Dict, Any

from .base import MemoryProbe, ProbeError
from .rss_probe import RssProbe
from .tracemalloc_probe import TracemallocProbe
from .process import ProcessProbe
from ..exceptions import UnknownProbeError

# Registry of available probes
PROBES = {
    "rss": RssProbe,
    "tracemalloc": TracemallocProbe,
}


def get_probe(name: str, config: Dict[str, Any] = None) -> MemoryProbe:
    """
    Get a probe instance by name.
    
    Args:
        name: Probe name (e.g., 'rss', 'tracemalloc')
        config: Probe-specific configuration
        
    Returns:
        Probe instance
        
    Raises:
        UnknownProbeError: If probe is not found
    """
    probe_class = PROBES.get(name.lower())
    if not probe_class:
        available = ", ".join(PROBES.keys())
        raise UnknownProbeError(f"Unknown probe: {name}. Available: {available}")
    
    return probe_class(config)


def list_probes() -> list:
    """List all available probe names."""
    return list(PROBES.keys())


__all__ = [
    "MemoryProbe",
    "ProbeError",
    "UnknownProbeError",
    "RssProbe",
    "TracemallocProbe",
    "ProcessProbe",
    "get_probe",
    "list_probes",
    "PROBES",
]
