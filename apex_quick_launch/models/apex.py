"""Models for Apex synchronous test runs on the Tooling API."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal, TypeAlias

from pydantic import Field

from apex_quick_launch.models.base import Model

TestLevel: TypeAlias = Literal["RunSpecifiedTests", "RunLocalTests", "RunAllTestsInOrg"]


class TestItem(Model):
    """A test class to run, optionally restricted to some methods."""

    __test__ = False

    class_name: str = Field(..., description="Apex test class name")
    test_methods: Sequence[str] | None = Field(
        default=None, description="Methods to run (None runs the whole class)"
    )


class SyncTestConfiguration(Model):
    """Request body for runTestsSynchronous."""

    tests: Sequence[TestItem] = Field(..., description="Tests to run")
    test_level: TestLevel = Field(..., description="Scope of the test run")


class TestSuccess(Model):
    """A passing test method as reported by runTestsSynchronous."""

    __test__ = False

    id: str
    name: str
    method_name: str
    namespace: str | None = None
    time: float = 0.0


class TestFailure(Model):
    """A failing test method as reported by runTestsSynchronous."""

    __test__ = False

    id: str
    name: str
    method_name: str
    namespace: str | None = None
    message: str | None = None
    stack_trace: str | None = None
    time: float = 0.0


class RunTestsResult(Model):
    """Response from runTestsSynchronous."""

    apex_log_id: str | None = None
    num_tests_run: int = 0
    num_failures: int = 0
    total_time: float = 0.0
    successes: Sequence[TestSuccess] = Field(default_factory=list)
    failures: Sequence[TestFailure] = Field(default_factory=list)

    def to_test_result(self) -> "TestResult":
        """Flatten successes and failures into test entries.

        The run produces a single debug log, so every entry references it.
        """
        tests: list[ApexTestResultData] = [
            ApexTestResultData(
                id=success.id,
                class_name=success.name,
                method_name=success.method_name,
                outcome="Pass",
                run_time=success.time,
                apex_log_id=self.apex_log_id,
            )
            for success in self.successes
        ]
        tests.extend(
            ApexTestResultData(
                id=failure.id,
                class_name=failure.name,
                method_name=failure.method_name,
                outcome="Fail",
                run_time=failure.time,
                message=failure.message,
                stack_trace=failure.stack_trace,
                apex_log_id=self.apex_log_id,
            )
            for failure in self.failures
        )
        return TestResult(
            tests=tests,
            tests_ran=self.num_tests_run,
            failing=self.num_failures,
            total_time=self.total_time,
        )


@dataclass(frozen=True, kw_only=True)
class ApexTestResultData:
    """Outcome of one test method."""

    id: str
    class_name: str
    method_name: str
    outcome: Literal["Pass", "Fail"]
    run_time: float
    message: str | None = None
    stack_trace: str | None = None
    apex_log_id: str | None = None


@dataclass(frozen=True, kw_only=True)
class TestResult:
    """Result of a synchronous test run."""

    __test__ = False

    tests: Sequence[ApexTestResultData]
    tests_ran: int
    failing: int
    total_time: float
