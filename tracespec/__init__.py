"""C++ execution-trace specification builder."""

from .api import (  # noqa: F401
    analyze,
    analyze_file,
    analyze_with_stats,
    dump_trace,
    trace_stats,
)
from .analyzer import TraceAnalyzer, TraceLimitExceeded  # noqa: F401
from .analyzer_types import AnalyzerConfig  # noqa: F401
from .trace_types import TraceSpecification  # noqa: F401
