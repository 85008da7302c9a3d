"""资源 ID 格式校验的单元测试."""

import uuid

import pytest

from crudkit.utils.id_validation import is_numeric, is_uuid


@pytest.mark.unit
def test_is_uuid() -> None:
    cases: list[tuple[object, bool]] = [
        ("550e8400-e29b-41d4-a716-446655440000", True),
        ("550E8400-E29B-41D4-A716-446655440000", True),
        (str(uuid.uuid4()), True),
        (uuid.uuid4(), True),
        ("550e8400e29b41d4a716446655440000", False),
        ("550e8400-e29b-41d4-a716-44665544000", False),
        ("550e8400-e29b-91d4-a716-446655440000", False),
        ("not-a-uuid", False),
        (42, False),
        (None, False),
    ]
    for value, expected in cases:
        assert is_uuid(value) is expected, value


@pytest.mark.unit
def test_is_numeric() -> None:
    cases: list[tuple[object, bool]] = [
        ("42", True),
        ("-7", True),
        ("+3.5", True),
        (".5", True),
        ("1e10", True),
        (" 12 ", True),
        (42, True),
        (4.2, True),
        ("", False),
        ("abc", False),
        ("12abc", False),
        ("0x1A", False),
        (True, False),
        (None, False),
    ]
    for value, expected in cases:
        assert is_numeric(value) is expected, value
