# tests/test_ids.py
import hashlib

import pytest

from office_hours.core.errors import InvalidInputError
from office_hours.core.ids import instance_id, new_id, parse_id

SERIES_ID = "0123456789abcdef0123456789abcdef"


def test_instance_id_is_truncated_sha256_of_series_and_instant():
    occurrence = 1_735_743_600_000_000_000
    expected = hashlib.sha256(
        bytes.fromhex(SERIES_ID) + occurrence.to_bytes(8, "big")
    ).digest()[:16].hex()

    assert instance_id(SERIES_ID, occurrence) == expected
    assert len(expected) == 32


def test_instance_id_is_deterministic_and_distinct_per_instant():
    occurrence = 1_735_743_600_000_000_000

    assert instance_id(SERIES_ID, occurrence) == instance_id(SERIES_ID, occurrence)
    assert instance_id(SERIES_ID, occurrence) != instance_id(SERIES_ID, occurrence + 1)


def test_new_id_is_unique_hex():
    ids = {new_id() for _ in range(1000)}

    assert len(ids) == 1000
    for value in ids:
        assert parse_id(value, "id") == value


def test_parse_id_lowercases():
    assert parse_id(SERIES_ID.upper(), "series_id") == SERIES_ID


@pytest.mark.parametrize("value", [None, "", "abc", "z" * 32, SERIES_ID + "00"])
def test_parse_id_rejects_malformed_values(value):
    with pytest.raises(InvalidInputError) as exc_info:
        parse_id(value, "series_id")
    assert exc_info.value.detail == "Invalid series_id"
    assert exc_info.value.status_code == 400
