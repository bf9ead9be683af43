"""Cross-cutting concerns: errors and observability."""
from core.errors import TTMError, AnalysisFailedError, ReportExportError
from core.observability import Tracer, trace_agent, get_metrics_summary

__all__ = [
    "TTMError",
    "AnalysisFailedError",
    "ReportExportError",
    "Tracer",
    "trace_agent",
    "get_metrics_summary",
]
