"""Pass/fail totals over result trees."""

from typing import NamedTuple

from spec_runner.models.result import ResultNode


class MalformedResultError(Exception):
    """Raised when a result tree contains something other than result nodes."""


class Stats(NamedTuple):
    """Expectation totals of a result tree."""

    passed: int
    failed: int


def aggregate(root: ResultNode) -> Stats:
    """Count passed and failed expectations in root and all of its descendants.

    Uses an explicit stack, so the depth of the tree is not limited by the
    recursion limit.

    Raises:
        MalformedResultError: If any node of the tree is not a ResultNode

    """
    passed = 0
    failed = 0
    stack: list[object] = [root]
    while stack:
        node = stack.pop()
        if not isinstance(node, ResultNode):
            raise MalformedResultError(
                f"Expected ResultNode in result tree, got {type(node).__name__}"
            )
        passed += len(node.passed_expectations)
        failed += len(node.failed_expectations)
        stack.extend(node.children)
    return Stats(passed=passed, failed=failed)
