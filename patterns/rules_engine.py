"""Pure-function rules engine pattern.

Rules are stateless functions: (data, field) -> RuleResult.
No database, no side effects. This makes them:
- Trivially testable (pure input/output)
- Composable (chain multiple rules)
- Auditable (deterministic, explainable)

The field rules below are the building blocks for request validation.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class RuleResult:
    """Outcome of a single rule evaluation."""

    passed: bool
    rule_name: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)


@dataclass
class RuleSetResult:
    """Aggregate outcome of multiple rules."""

    all_passed: bool
    results: list[RuleResult]
    failed: list[RuleResult] = field(default_factory=list)

    def __post_init__(self):
        self.failed = [r for r in self.results if not r.passed]
        self.all_passed = len(self.failed) == 0

    @property
    def messages(self) -> list[str]:
        """Messages of the failed rules, in evaluation order."""
        return [r.message for r in self.failed]


# ---------------------------------------------------------------------------
# Field rules
# ---------------------------------------------------------------------------

def check_is_object(data: Any) -> RuleResult:
    """The payload must be a JSON object (a dict once decoded)."""
    passed = isinstance(data, dict)
    return RuleResult(
        passed=passed,
        rule_name="is_object",
        message="OK" if passed else "Request body must be a JSON object",
        details={"type": type(data).__name__},
    )


def check_required(data: dict, name: str) -> RuleResult:
    """The field must be present and not null."""
    passed = data.get(name) is not None
    return RuleResult(
        passed=passed,
        rule_name=f"required:{name}",
        message="OK" if passed else f"{name} is required",
    )


def check_string(data: dict, name: str) -> RuleResult:
    """A present field must be a non-empty string."""
    value = data.get(name)
    passed = value is None or (isinstance(value, str) and bool(value.strip()))
    return RuleResult(
        passed=passed,
        rule_name=f"string:{name}",
        message="OK" if passed else f"{name} must be a non-empty string",
        details={"value": value},
    )


def check_integer(
    data: dict,
    name: str,
    minimum: int | None = None,
    maximum: int | None = None,
) -> RuleResult:
    """A present field must be an integer within [minimum, maximum].

    bool is a subclass of int in Python, so it is rejected explicitly.
    """
    value = data.get(name)
    passed = value is None or (
        isinstance(value, int)
        and not isinstance(value, bool)
        and (minimum is None or value >= minimum)
        and (maximum is None or value <= maximum)
    )
    return RuleResult(
        passed=passed,
        rule_name=f"integer:{name}",
        message="OK" if passed else f"{name} must be an integer",
        details={"value": value},
    )


def check_equals(data: dict, name: str, expected: Any) -> RuleResult:
    """A present field must equal `expected`."""
    value = data.get(name)
    passed = value is None or value == expected
    return RuleResult(
        passed=passed,
        rule_name=f"equals:{name}",
        message="OK" if passed else f"{name} '{value}' does not match '{expected}'",
        details={"value": value, "expected": expected},
    )


def check_no_unknown_fields(data: dict, allowed: Iterable[str]) -> RuleResult:
    """Reject keys outside the allowed set."""
    allowed = set(allowed)
    unknown = sorted(k for k in data if k not in allowed)
    return RuleResult(
        passed=not unknown,
        rule_name="no_unknown_fields",
        message="OK" if not unknown else f"Unknown field(s): {', '.join(unknown)}",
        details={"unknown": unknown},
    )


# ---------------------------------------------------------------------------
# Rule composition
# ---------------------------------------------------------------------------

def evaluate_rules(*rules: RuleResult) -> RuleSetResult:
    """Compose multiple rule results into a single aggregate.

    Example::

        result = evaluate_rules(
            check_required(data, "title"),
            check_string(data, "title"),
        )
        if not result.all_passed:
            raise ValidationError("; ".join(result.messages))
    """
    return RuleSetResult(
        all_passed=all(r.passed for r in rules),
        results=list(rules),
    )
