"""
Process-level memory and lifetime readings, used when no targets are given.
"""

import sys

import psutil


class ProcessProbe:
    """
    Read the hosting process's peak resident memory and start time.
    
    Example:
        probe = ProcessProbe()
        peak = probe.peak_memory()      # bytes
        started = probe.start_time()    # seconds since epoch
    """
    
    def __init__(self, pid: int = None):
        """
        Initialize process probe.
        
        Args:
            pid: Process to inspect (default: the current process)
        """
        self._process = psutil.Process(pid)
    
    def peak_memory(self) -> int:
        """
        Get the peak resident set size since process start.
        
        Returns:
            Peak memory in bytes
        """
        info = self._process.memory_info()
        
        # Windows reports the peak working set directly
        peak = getattr(info, "peak_wset", None)
        if peak is not None:
            return peak
        
        if self._process.pid != psutil.Process().pid:
            # getrusage only covers the calling process
            return info.rss
        
        import resource
        max_rss = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
        
        # ru_maxrss is in bytes on macOS and kilobytes elsewhere
        if sys.platform == "darwin":
            return max_rss
        return max_rss * 1024
    
    def start_time(self) -> float:
        """Get the process creation time in seconds since epoch."""
        return self._process.create_time()
    
    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(pid={self._process.pid})>"
