"""Composable API functions for C++ trace analysis.

Each function corresponds to a CLI workflow but is callable programmatically
without argparse.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from . import constants
from .analyzer import TraceAnalyzer
from .analyzer_types import AnalysisStats, AnalyzerConfig
from .parser import Parser, ParserFactory, TreeSitterParserFactory
from .trace_stats import summarize
from .trace_types import TraceSpecification

logger = logging.getLogger(__name__)


def analyze(
    source: str,
    config: AnalyzerConfig = AnalyzerConfig(),
    parser_factory: ParserFactory | None = None,
) -> TraceSpecification:
    """Parse C++ source and build its Trace Specification.

    Args:
        source: The C++ source text.
        config: Analyzer configuration (language, node limit).
        parser_factory: Pre-built ParserFactory for DI/testing; defaults to
            tree-sitter-language-pack.

    Returns:
        A freshly built TraceSpecification.  Parser failures propagate
        unchanged; nothing in a parseable tree makes this raise unless
        ``config.max_nodes`` is exceeded.
    """
    spec, _stats = analyze_with_stats(source, config, parser_factory)
    return spec


def analyze_with_stats(
    source: str,
    config: AnalyzerConfig = AnalyzerConfig(),
    parser_factory: ParserFactory | None = None,
) -> tuple[TraceSpecification, AnalysisStats]:
    """Like ``analyze`` but also returns timing and size statistics."""
    logger.info("Analyzing source (%s, %d chars)", config.language, len(source))
    stats = AnalysisStats(
        source_bytes=len(source.encode("utf-8")),
        source_lines=source.count("\n")
        + (1 if source and not source.endswith("\n") else 0),
    )

    t0 = time.perf_counter()
    parser = Parser(parser_factory or TreeSitterParserFactory(), config.language)
    tree = parser.parse(source)
    t1 = time.perf_counter()
    stats.parse_time = t1 - t0

    analyzer = TraceAnalyzer(config)
    spec = analyzer.analyze(tree, source.encode("utf-8"))
    stats.analyze_time = time.perf_counter() - t1

    stats.nodes_visited = analyzer.nodes_visited
    stats.steps = len(spec.steps)
    stats.variables = len(spec.variables)
    stats.flow_nodes = len(spec.flow)
    stats.recursive_calls = len(spec.call_stack)
    logger.info(
        "Trace built: %d steps from %d nodes in %.1fms",
        stats.steps,
        stats.nodes_visited,
        (stats.parse_time + stats.analyze_time) * 1000,
    )
    return spec, stats


def analyze_file(
    path: str | Path, config: AnalyzerConfig = AnalyzerConfig()
) -> TraceSpecification:
    """Read a C++ file and analyze it.

    Raises:
        OSError: If the file cannot be read; the analyzer is never invoked.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    logger.info("Reading source from %s", path)
    source = Path(path).read_text(encoding="utf-8")
    return analyze(source, config)


def dump_trace(
    source: str,
    config: AnalyzerConfig = AnalyzerConfig(),
    indent: int | None = constants.DEFAULT_JSON_INDENT,
) -> str:
    """Analyze source and return the Trace Specification as JSON text."""
    return analyze(source, config).to_json(indent=indent)


def trace_stats(source: str, config: AnalyzerConfig = AnalyzerConfig()) -> dict[str, int]:
    """Analyze source and return the number of entries in each trace list."""
    return summarize(analyze(source, config))
