"""
Domain models для radixcalc

Состояние сессии калькулятора и его сериализуемый снимок.
"""

from radixcalc.core.domain.calculator_state import (
    DEFAULT_ANGLE_MODE,
    DEFAULT_BASE,
    DEFAULT_DIGITS,
    AngleMode,
    CalculatorState,
)
from radixcalc.core.domain.snapshot import (
    SNAPSHOT_SCHEMA_VERSION,
    BigNumRecord,
    ComplexRecord,
    StateSnapshot,
    export_state,
    import_state,
)

__all__ = [
    # State
    "DEFAULT_ANGLE_MODE",
    "DEFAULT_BASE",
    "DEFAULT_DIGITS",
    "AngleMode",
    "CalculatorState",
    # Snapshot
    "SNAPSHOT_SCHEMA_VERSION",
    "BigNumRecord",
    "ComplexRecord",
    "StateSnapshot",
    "export_state",
    "import_state",
]
