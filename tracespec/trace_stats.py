"""Pure functions for computing statistics over a Trace Specification."""

from __future__ import annotations

from collections import Counter
from typing import Sequence

from tracespec.trace_types import Step, TraceSpecification


def count_actions(steps: Sequence[Step]) -> dict[str, int]:
    """Return a frequency map of step actions in the given step list.

    Args:
        steps: Trace steps, in any order.

    Returns:
        A dict mapping action strings (``"declare"``, ``"call"``, ...) to
        their occurrence counts.  Empty dict for an empty input list.
    """
    return dict(Counter(step.action for step in steps))


def summarize(spec: TraceSpecification) -> dict[str, int]:
    """Return the length of every entry list, keyed by its serialized name."""
    return {
        (field_info.alias or name): len(getattr(spec, name))
        for name, field_info in type(spec).model_fields.items()
    }
