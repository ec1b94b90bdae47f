"""Book validation rules: pure functions over the raw request body.

Builds on the field rules of the rules engine pattern. Unknown fields are
rejected.
"""

from typing import Any, Optional

from patterns.rules_engine import (
    RuleResult,
    RuleSetResult,
    check_equals,
    check_integer,
    check_is_object,
    check_no_unknown_fields,
    check_required,
    check_string,
    evaluate_rules,
)
from verticals.books.models.schemas import ValidationMode

KEY_FIELD = "isbn"
INTEGER_FIELDS = ("pages", "year")
BOOK_FIELDS = (KEY_FIELD, "amazon_url", "author", "language", "pages", "publisher", "title", "year")

# Integer columns are 32-bit signed
INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1


def validate_book(
    data: Any,
    mode: ValidationMode = ValidationMode.CREATE,
    isbn: Optional[str] = None,
) -> RuleSetResult:
    """Validate a book payload.

    CREATE requires every field including isbn. UPDATE requires every
    non-key field; isbn may be omitted but, when given, must match the isbn
    being replaced.
    """
    shape = check_is_object(data)
    if not shape.passed:
        return evaluate_rules(shape)

    rules: list[RuleResult] = []
    for name in BOOK_FIELDS:
        if name == KEY_FIELD and mode is ValidationMode.UPDATE:
            rules.append(check_string(data, name))
            rules.append(check_equals(data, name, isbn))
            continue
        rules.append(check_required(data, name))
        if name in INTEGER_FIELDS:
            rules.append(check_integer(data, name, minimum=INT32_MIN, maximum=INT32_MAX))
        else:
            rules.append(check_string(data, name))

    rules.append(check_no_unknown_fields(data, BOOK_FIELDS))
    return evaluate_rules(*rules)
