"""Check state enumeration."""

from enum import Enum


class CheckState(Enum):
    """Outcome of a check run, valued by its plugin exit code."""

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3

    @property
    def exit_code(self) -> int:
        """
        Process exit code for this state.

        Returns:
            int: Exit code understood by Sensu/Nagios-style schedulers
        """
        return self.value
