"""Command-line front end: analyze a C++ file and print its trace as JSON."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from . import constants
from .analyzer_types import AnalyzerConfig
from .api import analyze_with_stats
from .trace_stats import summarize

logger = logging.getLogger(__name__)

DEMO_SOURCE = """\
struct Node {
    int val;
    Node* next;
};

int fact(int n) {
    if (n <= 1) return 1;
    return n * fact(n - 1);
}

int main() {
    int arr[] = {1, 2, 3};
    Node* head = new Node(5);
    head->next = nullptr;
    int total = 0;
    for (int i = 0; i < 3; i++) {
        total = total + arr[i];
    }
    return fact(total);
}
"""


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Build an execution trace specification from C++ source"
    )
    parser.add_argument("file", nargs="?", help="C++ source file to analyze")
    parser.add_argument(
        "--indent",
        "-i",
        type=int,
        default=constants.DEFAULT_JSON_INDENT,
        help=f"JSON indent (default: {constants.DEFAULT_JSON_INDENT})",
    )
    parser.add_argument(
        "--max-nodes",
        "-n",
        type=int,
        default=None,
        help="Abort analysis after visiting this many syntax-tree nodes",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print entry counts and timings instead of the trace",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.file:
        # Demo mode: use a built-in example
        logger.info("No file provided, analyzing built-in demo")
        source = DEMO_SOURCE
    else:
        try:
            with open(args.file, encoding="utf-8") as f:
                source = f.read()
        except (OSError, UnicodeDecodeError) as exc:
            print(f"error: failed to read {args.file}: {exc}", file=sys.stderr)
            return 1

    config = AnalyzerConfig(max_nodes=args.max_nodes)
    try:
        spec, stats = analyze_with_stats(source, config)
    except Exception as exc:
        logger.debug("Analysis failed", exc_info=True)
        print(f"error: failed to analyze {args.file or 'demo'}: {exc}", file=sys.stderr)
        return 1

    if args.stats:
        print(stats.report())
        print(json.dumps(summarize(spec), indent=args.indent))
        return 0

    print(spec.to_json(indent=args.indent))
    return 0


if __name__ == "__main__":
    sys.exit(main())
