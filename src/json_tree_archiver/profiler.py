"""Performance profiler for conversion operations."""

import time
import psutil
import logging
from typing import Dict, Any, Optional, List
from dataclasses import dataclass
from contextlib import contextmanager


@dataclass
class PerformanceMetrics:
    """Performance metrics for one conversion operation."""
    operation_name: str
    start_time: float
    end_time: float
    duration: float
    input_size: int
    output_size: int
    memory_peak_mb: float
    memory_start_mb: float
    memory_end_mb: float
    files_created: int


class PerformanceProfiler:
    """
    Records duration and process memory of conversion operations.

    Memory is sampled as resident set size through psutil.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the performance profiler.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.metrics_history: List[PerformanceMetrics] = []
        self.current_operation: Optional[str] = None
        self.start_time: Optional[float] = None
        self.start_memory: Optional[float] = None
        self.peak_memory: float = 0
        self.input_size = 0
        self.output_size = 0
        self.files_created = 0

    @contextmanager
    def profile_operation(self, operation_name: str, input_size: int = 0):
        """
        Context manager for profiling operations.

        Args:
            operation_name: Name of the operation being profiled
            input_size: Size of input data in bytes
        """
        self.start_profiling(operation_name, input_size)
        try:
            yield self
        finally:
            self.stop_profiling()

    def start_profiling(self, operation_name: str, input_size: int = 0):
        """
        Start profiling an operation.

        Args:
            operation_name: Name of the operation
            input_size: Size of input data in bytes
        """
        self.current_operation = operation_name
        self.start_time = time.time()
        self.input_size = input_size
        self.output_size = 0
        self.files_created = 0
        self.start_memory = self._current_memory_mb()
        self.peak_memory = self.start_memory

        self.logger.debug(f"Started profiling: {operation_name}")

    def sample_performance(self):
        """Sample current memory usage."""
        if not self.current_operation:
            return
        self.peak_memory = max(self.peak_memory, self._current_memory_mb())

    def record_output(self, output_size: int = 0, files_created: int = 0):
        """
        Record what the active operation produced.

        Args:
            output_size: Size of output data in bytes
            files_created: Number of files in the produced tree
        """
        self.output_size = output_size
        self.files_created = files_created
        self.sample_performance()

    def stop_profiling(self) -> Optional[PerformanceMetrics]:
        """
        Stop profiling and return metrics.

        Returns:
            PerformanceMetrics, or None when no operation is active
        """
        if not self.current_operation or self.start_time is None:
            return None

        end_time = time.time()
        end_memory = self._current_memory_mb()
        self.peak_memory = max(self.peak_memory, end_memory)

        metrics = PerformanceMetrics(
            operation_name=self.current_operation,
            start_time=self.start_time,
            end_time=end_time,
            duration=end_time - self.start_time,
            input_size=self.input_size,
            output_size=self.output_size,
            memory_peak_mb=self.peak_memory,
            memory_start_mb=self.start_memory or 0.0,
            memory_end_mb=end_memory,
            files_created=self.files_created
        )
        self.metrics_history.append(metrics)

        self.logger.debug(f"Performance Summary - {self.current_operation}: "
                          f"{metrics.duration:.3f}s, peak memory {metrics.memory_peak_mb:.1f} MB")

        self.current_operation = None
        self.start_time = None
        self.start_memory = None

        return metrics

    def get_performance_summary(self) -> Dict[str, Any]:
        """
        Get summary of all recorded operations.

        Returns:
            Dictionary with performance summary
        """
        if not self.metrics_history:
            return {"total_operations": 0}

        return {
            "total_operations": len(self.metrics_history),
            "total_duration": sum(m.duration for m in self.metrics_history),
            "total_input_bytes": sum(m.input_size for m in self.metrics_history),
            "max_memory_peak_mb": max(m.memory_peak_mb for m in self.metrics_history),
            "operations": [m.operation_name for m in self.metrics_history],
        }

    def _current_memory_mb(self) -> float:
        try:
            return psutil.Process().memory_info().rss / 1024 / 1024
        except psutil.Error as e:
            self.logger.warning(f"Performance sampling failed: {e}")
            return self.peak_memory
