import json
import os
import tempfile

import pytest

from pratt.pratt_errors import PrecedenceError
from pratt.pratt_precedence import PrecedenceTable


def test_dict_mode_basic() -> None:
    table = PrecedenceTable()
    table.configure({"+": 10, "*": 20})
    assert table.powers == {"+": 10, "*": 20}


def test_dict_mode_groups() -> None:
    table = PrecedenceTable.from_config({("+", "-"): 10, ("*", "/"): 20})
    assert table.summary() == {"+": 10, "-": 10, "*": 20, "/": 20}


def test_comma_is_a_single_type() -> None:
    assert PrecedenceTable.from_config({",": 0, "+": 10}).summary() == {",": 0, "+": 10}
    assert PrecedenceTable.from_config([[","], ["+"]]).summary() == {",": 10, "+": 20}
    assert PrecedenceTable.from_config({"a,b": 5}).summary() == {"a,b": 5}


def test_list_mode_levels_lowest_first() -> None:
    table = PrecedenceTable.from_config([["+", "-"], ["*", "/"], ["^"]])
    assert table.powers["-"] == 10
    assert table.powers["/"] == 20
    assert table.powers["^"] == 30


def test_list_mode_custom_step() -> None:
    table = PrecedenceTable.from_config(["||", "&&"], step=5)
    assert table.summary() == {"||": 5, "&&": 10}


def test_non_string_types_are_kept() -> None:
    table = PrecedenceTable.from_config({1: 10, (2, 3): 20})
    assert table.summary() == {1: 10, 2: 20, 3: 20}


def test_none_entries_are_skipped() -> None:
    table = PrecedenceTable.from_config([None, ["+"]])
    assert table.summary() == {"+": 20}


def test_conflict_within_one_config_raises() -> None:
    with pytest.raises(PrecedenceError) as e:
        PrecedenceTable.from_config([["+"], ["+"]])
    assert "collision" in str(e.value)
    assert len(e.value.conflicts) == 1


def test_conflict_with_existing_entry_raises() -> None:
    table = PrecedenceTable()
    table.configure({"+": 10})
    with pytest.raises(PrecedenceError) as e:
        table.configure({"+": 20})
    assert "'+'" in e.value.conflicts[0]
    assert table.powers["+"] == 10


def test_same_power_twice_is_not_a_conflict() -> None:
    table = PrecedenceTable()
    table.configure({"+": 10})
    table.configure({("+", "-"): 10})
    assert table.summary() == {"+": 10, "-": 10}


@pytest.mark.parametrize("power", ["10", 1.5, True, None])
def test_non_integer_power_raises(power: object) -> None:
    with pytest.raises(PrecedenceError, match="must be an integer"):
        PrecedenceTable.from_config({"+": power})


def test_unsupported_config_shape_raises() -> None:
    with pytest.raises(PrecedenceError, match="either a list or a dict"):
        PrecedenceTable().configure("+")  # type: ignore[arg-type]


def test_load_from_json() -> None:
    with tempfile.NamedTemporaryFile("w", suffix=".json", delete=False) as f:
        json.dump({"+,-": 10, "*,/": 20}, f)
        path = f.name
    try:
        table = PrecedenceTable()
        table.load_from_json(path)
        assert table.summary() == {"+": 10, "-": 10, "*": 20, "/": 20}
    finally:
        os.remove(path)


def test_load_from_json_invalid_file_raises() -> None:
    with tempfile.NamedTemporaryFile("w", suffix=".json", delete=False) as f:
        f.write("{not json")
        path = f.name
    try:
        with pytest.raises(PrecedenceError, match="Failed to load precedence file"):
            PrecedenceTable().load_from_json(path)
    finally:
        os.remove(path)


def test_load_from_json_requires_object() -> None:
    with tempfile.NamedTemporaryFile("w", suffix=".json", delete=False) as f:
        json.dump([["+"]], f)
        path = f.name
    try:
        with pytest.raises(PrecedenceError, match="JSON object"):
            PrecedenceTable().load_from_json(path)
    finally:
        os.remove(path)


def test_load_from_missing_file_raises() -> None:
    with pytest.raises(PrecedenceError):
        PrecedenceTable().load_from_json("/nonexistent/precedence.json")


def test_report_orders_tightest_first() -> None:
    table = PrecedenceTable.from_config([["+"], ["*"]])
    lines = table.report().splitlines()
    assert lines[0].strip() == "* → 20"
    assert lines[1].strip() == "+ → 10"


def test_load_from_json_splits_groups_but_keeps_bare_comma() -> None:
    with tempfile.NamedTemporaryFile("w", suffix=".json", delete=False) as f:
        json.dump({",": 0, "+, -": 10}, f)
        path = f.name
    try:
        table = PrecedenceTable()
        table.load_from_json(path)
        assert table.summary() == {",": 0, "+": 10, "-": 10}
    finally:
        os.remove(path)
