"""
Rendering for software evaluation output.

This module renders classification results to deterministic, human-readable
text laid out like the result table: compatible apps on the left,
incompatible apps on the right.
"""

from __future__ import annotations

from typing import Sequence

from upgrade_engine.data_models import AppInfo

COMPATIBLE_HEADER = "Compatible Apps"
INCOMPATIBLE_HEADER = "Incompatible Apps"


def render_evaluation_text(
    compatible: Sequence[AppInfo],
    incompatible: Sequence[AppInfo],
    *,
    check_done: bool = True,
) -> str:
    """
    Render evaluation results as deterministic plain text.

    Parameters
    ----------
    compatible:
        Apps classified as compatible, in classification order.
    incompatible:
        Apps classified as incompatible, in classification order.
    check_done:
        Whether the worker reported completion. An incomplete check is flagged
        in the header.

    Returns
    -------
    str
        Text report.
    """
    lines: list[str] = []
    lines.append("Evaluation Result" if check_done else "Evaluation Result (check incomplete)")
    lines.append(f"compatible: {len(compatible)}")
    lines.append(f"incompatible: {len(incompatible)}")
    lines.append("")

    left_names = [info.name for info in compatible]
    width = max([len(COMPATIBLE_HEADER), *(len(n) for n in left_names)])

    lines.append(f"{COMPATIBLE_HEADER.ljust(width)} | {INCOMPATIBLE_HEADER}")
    lines.append(f"{'-' * width}-+-{'-' * len(INCOMPATIBLE_HEADER)}")

    row_count = max(len(compatible), len(incompatible))
    for i in range(row_count):
        left = left_names[i] if i < len(left_names) else ""
        right = incompatible[i].name if i < len(incompatible) else ""
        lines.append(f"{left.ljust(width)} | {right}".rstrip())

    return "\n".join(lines)

