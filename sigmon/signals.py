"""
Recognized OS signals.

The monitor intercepts exactly five signals. USR1 and USR2 do not exist on
every platform (Windows has neither); there they are simply never delivered.
"""

import enum
import signal


class Signal(str, enum.Enum):
    """
    A recognized interrupt notification.

    Members compare by value and their value is the conventional short name,
    so ``Signal.HUP == "HUP"`` holds.
    """

    HUP = "HUP"
    INT = "INT"
    TERM = "TERM"
    USR1 = "USR1"
    USR2 = "USR2"

    def __str__(self) -> str:
        return self.value

    @property
    def signum(self) -> int | None:
        """Host signal number, or None when the platform lacks this signal."""
        found = getattr(signal, f"SIG{self.value}", None)
        return int(found) if found is not None else None

    @classmethod
    def from_signum(cls, signum: int) -> "Signal":
        """
        Map a host signal number to its Signal.

        Raises:
            ValueError: If signum is not one of the recognized signals
        """
        for member in cls:
            if member.signum == signum:
                return member
        raise ValueError(f"unrecognized signal number: {signum}")

    @classmethod
    def available(cls) -> tuple["Signal", ...]:
        """Recognized signals that exist on this host, in declaration order."""
        return tuple(member for member in cls if member.signum is not None)
