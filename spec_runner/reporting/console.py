"""Plain text reporting of spec results."""

import sys
from dataclasses import dataclass
from typing import TextIO

from spec_runner.aggregator import aggregate
from spec_runner.models.result import ResultNode

PASSED_SYMBOL = "✔"
FAILED_SYMBOL = "✖"


def indent(level: int) -> str:
    """Return the indentation for a tree level."""
    return "  " * level


def render_tree(root: ResultNode) -> list[str]:
    """Render root and its descendants, one line per entry."""
    lines: list[str] = []
    stack: list[tuple[ResultNode, int]] = [(root, 0)]
    while stack:
        node, level = stack.pop()
        lines.append(f"{indent(level)}{node.desc}:")
        for failed in node.failed_expectations:
            lines.append(f"{indent(level + 1)}{FAILED_SYMBOL} {failed.desc}:")
            lines.extend(f"{indent(level + 2)}-- {msg}" for msg in failed.messages)
        for passed in node.passed_expectations:
            lines.append(
                f"{indent(level + 1)}{PASSED_SYMBOL} {passed.desc} "
                f"({passed.duration:.2f}s)"
            )
        stack.extend((child, level + 1) for child in reversed(node.children))
    return lines


@dataclass(kw_only=True)
class ReportTotals:
    """Running totals of a run."""

    passed: int = 0
    failed: int = 0
    duration: float = 0.0


class ConsoleReporter:
    """Prints spec results and keeps totals for the run.

    Results must be handed over one at a time; when suites run concurrently
    the caller is responsible for serializing calls to handle. No result may
    be handled after done.
    """

    def __init__(self, verbose: bool = False, stream: TextIO | None = None) -> None:
        self.verbose = verbose
        self.stream = stream or sys.stdout
        self.totals = ReportTotals()

    def handle(self, root: ResultNode) -> None:
        """Add root to the totals and print it.

        The whole tree is printed when verbose or when anything failed,
        otherwise a single line.
        """
        stats = aggregate(root)
        self.totals.duration += root.duration
        self.totals.passed += stats.passed
        self.totals.failed += stats.failed

        if self.verbose or stats.failed > 0:
            for line in render_tree(root):
                self._print(line)
        else:
            self._print(f"{PASSED_SYMBOL} {root.desc}")

    def done(self) -> ReportTotals:
        """Print the totals of the run and return them."""
        self._print(
            f"Passed: {self.totals.passed} Failed: {self.totals.failed} "
            f"in {self.totals.duration:.2f}s"
        )
        return self.totals

    def _print(self, line: str) -> None:
        print(line, file=self.stream)
