"""
Тесты StateStore: атомарная запись и устойчивое чтение снимка
"""

import json
import logging
from pathlib import Path

import pytest

from radixcalc.core.domain.calculator_state import AngleMode, CalculatorState
from radixcalc.core.math.bignum import BigNum
from radixcalc.core.math.complex_number import Complex
from radixcalc.shell.storage import DEFAULT_STATE_PATH, StateStore


@pytest.fixture
def store(tmp_path: Path) -> StateStore:
    return StateStore(tmp_path / "nested" / "state.json")


def test_default_path() -> None:
    assert StateStore().path == DEFAULT_STATE_PATH
    assert DEFAULT_STATE_PATH.name == "state.json"


def test_round_trip(store: StateStore) -> None:
    state = CalculatorState(base=8, digits=30, angle_mode=AngleMode.DEGREES)
    state.append_history(Complex(BigNum.from_int(64), BigNum.from_limbs(-1, [5], -1)))

    store.save(state)
    restored = store.load()

    assert restored is not None
    assert restored.base == 8
    assert restored.digits == 30
    assert restored.angle_mode is AngleMode.DEGREES
    assert restored.history == state.history


def test_save_leaves_no_temporary_files(store: StateStore) -> None:
    store.save(CalculatorState())
    store.save(CalculatorState(base=2))
    assert [path.name for path in store.path.parent.iterdir()] == ["state.json"]


def test_saved_file_is_plain_json(store: StateStore) -> None:
    store.save(CalculatorState(base=16))
    payload = json.loads(store.path.read_text(encoding="utf-8"))
    assert payload == {
        "schema_version": "1",
        "base": 16,
        "digits": 12,
        "angle_mode": "radians",
        "history": [],
    }


def test_missing_file(store: StateStore) -> None:
    assert store.load() is None


def test_corrupt_file(store: StateStore, caplog: pytest.LogCaptureFixture) -> None:
    store.path.parent.mkdir(parents=True)
    store.path.write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="radixcalc"):
        assert store.load() is None
    assert "Cannot read state file" in caplog.text


@pytest.mark.parametrize(
    "payload",
    [
        {"schema_version": "1", "base": 99, "digits": 12, "angle_mode": "radians", "history": []},
        {"schema_version": "1", "base": 10, "digits": 12, "angle_mode": "radians"},
        {
            "schema_version": "1",
            "base": 10,
            "digits": 12,
            "angle_mode": "radians",
            "history": [
                {
                    "re": {"sign": 1, "digits": [0, 1], "point": 2, "precision": 2},
                    "im": {"sign": 0, "digits": [0], "point": 1, "precision": 1},
                }
            ],
        },
    ],
)
def test_invalid_snapshot(store: StateStore, caplog: pytest.LogCaptureFixture, payload: dict) -> None:
    store.path.parent.mkdir(parents=True)
    store.path.write_text(json.dumps(payload), encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="radixcalc"):
        assert store.load() is None
    assert "Ignoring invalid state file" in caplog.text


def test_invalid_snapshot_names_the_field(store: StateStore, caplog: pytest.LogCaptureFixture) -> None:
    store.save(CalculatorState())
    payload = json.loads(store.path.read_text(encoding="utf-8"))
    payload["digits"] = 0
    store.path.write_text(json.dumps(payload), encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="radixcalc"):
        assert store.load() is None
    assert "digits: 0 is less than the minimum of 1" in caplog.text


def test_load_logs_summary(store: StateStore, caplog: pytest.LogCaptureFixture) -> None:
    store.save(CalculatorState(base=12))
    with caplog.at_level(logging.INFO, logger="radixcalc"):
        store.load()
    assert "base 12, 12 digits, radians, 0 history entries" in caplog.text


def test_invalid_snapshot_lists_every_violation(store: StateStore, caplog: pytest.LogCaptureFixture) -> None:
    payload = {"schema_version": "1", "base": 99, "digits": 0, "angle_mode": "radians", "history": []}
    store.path.parent.mkdir(parents=True)
    store.path.write_text(json.dumps(payload), encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="radixcalc"):
        assert store.load() is None
    assert "base: 99 is greater than the maximum of 36; digits: 0 is less than the minimum of 1" in caplog.text
