"""Analysis configuration and statistics (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass

from . import constants


@dataclass(frozen=True)
class AnalyzerConfig:
    """Groups analyzer configuration.

    ``max_nodes`` bounds the number of syntax-tree nodes one analysis may
    visit; ``None`` leaves traversal unbounded.
    """

    language: str = constants.DEFAULT_LANGUAGE
    max_nodes: int | None = None


@dataclass
class AnalysisStats:
    """Timing and size statistics for one analysis."""

    source_bytes: int = 0
    source_lines: int = 0

    # Stage timings (seconds)
    parse_time: float = 0.0
    analyze_time: float = 0.0

    nodes_visited: int = 0
    steps: int = 0
    variables: int = 0
    flow_nodes: int = 0
    recursive_calls: int = 0

    def report(self) -> str:
        lines = [
            "═══ Analysis Statistics ═══",
            f"  Source: {self.source_lines} lines, {self.source_bytes} bytes",
            "",
            f"  {'Stage':<20} {'Time':>10}  {'Output':>30}",
            f"  {'─' * 20} {'─' * 10}  {'─' * 30}",
        ]

        stages = [
            ("Parse", self.parse_time, ""),
            (
                "Analyze",
                self.analyze_time,
                f"{self.nodes_visited} nodes, {self.steps} steps",
            ),
        ]
        for name, t, output in stages:
            time_str = f"{t * 1000:>8.1f}ms"
            lines.append(f"  {name:<20} {time_str:>10}  {output:>30}")

        lines.append(f"  {'─' * 20} {'─' * 10}  {'─' * 30}")
        lines.append(
            f"  {'Total':<20} {(self.parse_time + self.analyze_time) * 1000:>8.1f}ms"
        )
        lines.append("")
        lines.append(
            f"  Trace: {self.variables} variables,"
            f" {self.flow_nodes} flow nodes,"
            f" {self.recursive_calls} recursive calls"
        )
        return "\n".join(lines)
