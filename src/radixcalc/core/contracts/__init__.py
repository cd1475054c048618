"""
Contract Validation Module

Валидация JSON контракта снимка состояния калькулятора.
"""

from .validators import (
    STATE_SCHEMA_NAME,
    ContractValidator,
    SchemaLoader,
    StateSnapshotValidator,
    describe_state_snapshot_errors,
    error_path,
    validate_state_snapshot,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "StateSnapshotValidator",
    # Functions
    "validate_state_snapshot",
    "describe_state_snapshot_errors",
    "error_path",
    # Constants
    "STATE_SCHEMA_NAME",
]
