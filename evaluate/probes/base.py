"""
Base memory probe interface.
All probes must implement this interface.

Peak tracking behind a probe is process-wide state: "reset peak" and
"read peak" are global calls. Two evaluations interleaving in the same
process will read each other's peaks, so concurrent callers must serialize
the whole instrumentation region themselves.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any

from ..exceptions import ProbeError


class MemoryProbe(ABC):
    """
    Abstract base class for memory probes.
    
    A probe reports memory in bytes. It is started before the first
    measurement and stopped after the last one; using it as a context
    manager does both.
    
    Example:
        class MyProbe(MemoryProbe):
            name = "myprobe"
            
            def reset_peak(self):
                ...
    """
    
    # Probe identification
    name: str = "base"
    display_name: str = "Base Probe"
    
    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize probe.
        
        Args:
            config: Probe-specific configuration
        """
        self.config = config or {}
    
    def start(self) -> None:
        """Begin tracking allocations."""
        pass
    
    def stop(self) -> None:
        """Stop tracking allocations started by this probe."""
        pass
    
    @abstractmethod
    def reset_peak(self) -> None:
        """Reset the high-water mark to the current usage."""
        pass
    
    @abstractmethod
    def current_peak(self) -> int:
        """
        Get the high-water mark since the last reset.
        
        Returns:
            Peak memory in bytes
        """
        pass
    
    @abstractmethod
    def current_usage(self) -> int:
        """
        Get the instantaneous memory usage.
        
        Returns:
            Current memory in bytes
        """
        pass
    
    def __enter__(self) -> "MemoryProbe":
        self.start()
        return self
    
    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
    
    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name={self.name})>"

