"""
Shell: диспетчер команд, хранилище состояния и REPL.
"""

from radixcalc.shell.commands import CommandResult, dispatch_command, execute, help_text, run_self_test
from radixcalc.shell.storage import DEFAULT_STATE_PATH, StateStore

__all__ = [
    "CommandResult",
    "dispatch_command",
    "execute",
    "help_text",
    "run_self_test",
    "DEFAULT_STATE_PATH",
    "StateStore",
]
