"""Identification of the test to debug."""

from dataclasses import dataclass

from apex_quick_launch.models.apex import TestItem


@dataclass(frozen=True, kw_only=True)
class TestTarget:
    """A test class, optionally narrowed down to a single method.

    Without a method name every method of the class is run.
    """

    __test__ = False

    class_name: str
    method_name: str | None = None

    def to_test_item(self) -> TestItem:
        """Convert to the item sent in a synchronous test run request."""
        return TestItem(
            class_name=self.class_name,
            test_methods=[self.method_name] if self.method_name else None,
        )
