"""
StateStore — хранение снимка CalculatorState на диске

Формат: JSON по контракту calculator_state.json.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Запись атомарна: временный файл в том же каталоге, затем os.replace
2. Снимок проверяется контрактом и при записи, и при чтении
3. Нечитаемый файл состояния не мешает запуску: load() возвращает None
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Final, Optional, Union

import pydantic

from radixcalc.core.contracts.validators import describe_state_snapshot_errors, validate_state_snapshot
from radixcalc.core.domain.calculator_state import CalculatorState
from radixcalc.core.domain.snapshot import StateSnapshot, export_state, import_state

logger = logging.getLogger(__name__)

DEFAULT_STATE_PATH: Final[Path] = Path.home() / ".config" / "radixcalc" / "state.json"


class StateStore:
    """Чтение и запись снимка состояния по пути path."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else DEFAULT_STATE_PATH

    def load(self) -> Optional[CalculatorState]:
        """
        Returns:
            Восстановленное состояние или None, если файла нет или он повреждён
        """
        if not self.path.exists():
            logger.debug("No state file at %s", self.path)
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Cannot read state file %s: %s", self.path, exc)
            return None

        violations = describe_state_snapshot_errors(payload)
        if violations:
            logger.warning("Ignoring invalid state file %s: %s", self.path, "; ".join(violations))
            return None
        try:
            snapshot = StateSnapshot.model_validate(payload)
        except pydantic.ValidationError as exc:
            logger.warning("Ignoring invalid state file %s: %s", self.path, exc)
            return None

        state = import_state(snapshot)
        logger.info(
            "Loaded state from %s: base %d, %d digits, %s, %d history entries",
            self.path,
            state.base,
            state.digits,
            state.angle_mode.value,
            len(state.history),
        )
        return state

    def save(self, state: CalculatorState) -> None:
        """
        Raises:
            OSError: Каталог или файл недоступны для записи
        """
        payload = export_state(state).model_dump(mode="json")
        validate_state_snapshot(payload)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(prefix=".state-", suffix=".json", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
            os.replace(temp_name, self.path)
        except BaseException:
            os.unlink(temp_name)
            raise
        logger.info("Saved state to %s (%d history entries)", self.path, len(state.history))
