"""Observability Module - Logging, Tracing, and Metrics

This module provides:
1. Structured logging configuration shared by the whole wizard
2. Tracing of the slow operations (diagnosis request, report export)
3. Success/latency metrics for those operations
"""
import logging
import functools
import time
from typing import Dict, Any, Optional, Callable, List
from dataclasses import dataclass, field

# Configure structured logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s | %(name)s | %(levelname)s | %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

logger = logging.getLogger("ttm")


@dataclass
class OperationTrace:
    """Timing and outcome of one traced operation."""
    operation: str
    start_time: float = field(default_factory=time.perf_counter)
    duration_ms: Optional[float] = None
    success: bool = True

    def complete(self, success: bool = True):
        self.duration_ms = (time.perf_counter() - self.start_time) * 1000
        self.success = success


@dataclass
class OperationMetrics:
    """Aggregated metrics for traced operations."""
    total_requests: int = 0
    successful_requests: int = 0
    total_latency_ms: float = 0
    latencies: Dict[str, List[float]] = field(default_factory=dict)

    @property
    def success_rate(self) -> float:
        if self.total_requests == 0:
            return 0.0
        return self.successful_requests / self.total_requests

    @property
    def avg_latency_ms(self) -> float:
        if self.total_requests == 0:
            return 0.0
        return self.total_latency_ms / self.total_requests

    def record(self, trace: OperationTrace):
        """Record a trace into metrics."""
        self.total_requests += 1
        if trace.success:
            self.successful_requests += 1

        if trace.duration_ms is not None:
            self.total_latency_ms += trace.duration_ms
            self.latencies.setdefault(trace.operation, []).append(trace.duration_ms)

    def summary(self) -> Dict[str, Any]:
        """Return metrics summary."""
        op_avg = {
            op: sum(values) / len(values)
            for op, values in self.latencies.items()
            if values
        }
        return {
            "total_requests": self.total_requests,
            "success_rate": f"{self.success_rate:.1%}",
            "avg_latency_ms": f"{self.avg_latency_ms:.0f}ms",
            "operation_avg_latency": op_avg,
        }

    def reset(self):
        self.total_requests = 0
        self.successful_requests = 0
        self.total_latency_ms = 0
        self.latencies = {}


# Global metrics instance
metrics = OperationMetrics()


class Tracer:
    """Context manager for tracing an operation."""

    def __init__(self, operation: str):
        self.trace = OperationTrace(operation=operation)

    def __enter__(self):
        logger.info(f"▶ {self.trace.operation} started")
        return self.trace

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            self.trace.complete(success=False)
            logger.error(f"✖ {self.trace.operation} failed: {exc_val}")
        else:
            self.trace.complete(success=True)
            logger.info(f"✔ {self.trace.operation} completed in {self.trace.duration_ms:.0f}ms")

        metrics.record(self.trace)
        return False  # Don't suppress exceptions


def trace_agent(func: Callable) -> Callable:
    """Decorator to trace an agent method under ``ClassName.method``."""
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs):
        operation = f"{self.__class__.__name__}.{func.__name__}"
        with Tracer(operation):
            return func(self, *args, **kwargs)
    return wrapper


def get_metrics_summary() -> Dict[str, Any]:
    """Get current metrics summary."""
    return metrics.summary()
