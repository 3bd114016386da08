"""Unit tests for the Aave Pool result parser."""
from __future__ import annotations

from collections import namedtuple

import pytest

from aave_monitor.protocols.aave.abi import ACCOUNT_DATA_FIELDS, POOL_ABI, field_names
from aave_monitor.protocols.aave.parser import parse_account_data, to_record

RAW_ACCOUNT_DATA = (
    2000 * 10**8,
    1000 * 10**8,
    500 * 10**8,
    8250,
    7750,
    165 * 10**16,
)


class TestToRecord:
    def test_plain_tuple(self) -> None:
        assert to_record((1, 2), ("a", "b")) == {"a": 1, "b": 2}

    def test_named_tuple(self) -> None:
        Point = namedtuple("Point", "a b")
        assert to_record(Point(1, 2), ("a", "b")) == {"a": 1, "b": 2}

    def test_dict(self) -> None:
        assert to_record({"a": 1}, ("a",)) == {"a": 1}

    def test_short_tuple_raises(self) -> None:
        with pytest.raises(ValueError, match="expected at least 2"):
            to_record((1,), ("a", "b"))


class TestParseAccountData:
    def test_positional_result(self) -> None:
        data = parse_account_data(RAW_ACCOUNT_DATA)
        assert data.total_collateral_base == 2000 * 10**8
        assert data.total_debt_base == 1000 * 10**8
        assert data.available_borrows_base == 500 * 10**8
        assert data.current_liquidation_threshold == 8250
        assert data.ltv == 7750
        assert data.health_factor == 165 * 10**16

    def test_named_result(self) -> None:
        named = dict(zip(field_names(ACCOUNT_DATA_FIELDS), RAW_ACCOUNT_DATA))
        assert parse_account_data(named) == parse_account_data(RAW_ACCOUNT_DATA)

    def test_truncated_result_raises(self) -> None:
        with pytest.raises(ValueError):
            parse_account_data(RAW_ACCOUNT_DATA[:4])


class TestAbi:
    def test_account_data_outputs_match_field_order(self) -> None:
        fn = next(item for item in POOL_ABI if item["name"] == "getUserAccountData")
        assert [o["name"] for o in fn["outputs"]] == list(field_names(ACCOUNT_DATA_FIELDS))
        assert fn["inputs"][0]["type"] == "address"
