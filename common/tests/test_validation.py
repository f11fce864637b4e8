import pytest
from common.validation import FieldError, as_dict, raise_for_errors, require_int
from rest_framework.exceptions import ValidationError


@pytest.mark.parametrize("value", [None, "3", 2.5, True])
def test_require_int_rejects_non_integers(value):
    assert require_int("quantity", value) == [FieldError("quantity", "A valid integer is required.")]


def test_require_int_bounds():
    assert require_int("page", 0, minimum=1)[0].field == "page"
    assert require_int("page_size", 101, maximum=100)[0].field == "page_size"
    assert require_int("page", 1, minimum=1, maximum=100) == []


def test_raise_for_errors_groups_by_field():
    errors = [FieldError("a", "one"), FieldError("a", "two"), FieldError("b", "three")]
    assert as_dict(errors) == {"a": ["one", "two"], "b": ["three"]}
    with pytest.raises(ValidationError) as info:
        raise_for_errors(errors)
    assert info.value.detail == {"a": ["one", "two"], "b": ["three"]}
    raise_for_errors([])
