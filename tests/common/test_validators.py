import pytest

from attendance_payroll.common.validators import optional_bool, require_break_type
from attendance_payroll.core.enums import BreakType
from attendance_payroll.core.exceptions import ValidationError


@pytest.mark.parametrize(
    "value, expected",
    [
        (BreakType.TEA, BreakType.TEA),
        ("Lunch", BreakType.LUNCH),
        (" dinner ", BreakType.DINNER),
        (None, BreakType.OTHER),
        ("", BreakType.OTHER),
    ],
)
def test_require_break_type(value, expected):
    assert require_break_type(value) is expected


def test_require_break_type_rejects_unknown():
    with pytest.raises(ValidationError):
        require_break_type("nap")


def test_optional_bool_only_takes_json_booleans():
    assert optional_bool(None, "override") is False
    assert optional_bool(True, "override") is True
    assert optional_bool(False, "override") is False

    for value in ("false", "true", 1, 0):
        with pytest.raises(ValidationError):
            optional_bool(value, "override")
