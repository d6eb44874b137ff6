"""Models for spec execution results reported by the executing runtime."""

from collections.abc import Sequence

from pydantic import Field

from spec_runner.models.base import Model


class PassedExpectation(Model):
    """A single expectation that held."""

    desc: str = Field(..., description="Expectation description")
    duration: float = Field(default=0.0, description="Time taken in seconds")


class FailedExpectation(Model):
    """A single expectation that did not hold."""

    desc: str = Field(..., description="Expectation description")
    messages: Sequence[str] = Field(
        default_factory=list, description="Failure messages in emitted order"
    )


class ResultNode(Model):
    """Outcome of one suite, with the outcomes of its nested suites.

    The tree is built once by the executing runtime and only read afterwards.
    """

    desc: str = Field(..., description="Suite description")
    passed_expectations: Sequence[PassedExpectation] = Field(default_factory=list)
    failed_expectations: Sequence[FailedExpectation] = Field(default_factory=list)
    duration: float = Field(default=0.0, description="Suite duration in seconds")
    children: Sequence["ResultNode"] = Field(default_factory=list)


def failed_result(desc: str, message: str) -> ResultNode:
    """Build a single-failure result for a unit whose execution broke down."""
    return ResultNode(
        desc=desc,
        failed_expectations=[FailedExpectation(desc="execution", messages=[message])],
    )
