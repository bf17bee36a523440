"""
modules/gate/state.py: Gate state value and the fixed storage keys.
"""

from dataclasses import dataclass
from typing import Optional

from core.base import GateStatus

# Preference key holding the last trusted URL
URL_CACHE_KEY = "celaraCacheTrustedURL"
# Secure-store account holding the verification token
TOKEN_CACHE_KEY = "celaraCacheVerificationToken"


@dataclass(frozen=True)
class GateState:
    """
    One variant of idle | validating | approved(token, url) | use_native.

    token and url are set only for APPROVED.
    """

    status: GateStatus
    token: Optional[str] = None
    url: Optional[str] = None

    @classmethod
    def idle(cls) -> "GateState":
        return cls(GateStatus.IDLE)

    @classmethod
    def validating(cls) -> "GateState":
        return cls(GateStatus.VALIDATING)

    @classmethod
    def approved(cls, token: str, url: str) -> "GateState":
        return cls(GateStatus.APPROVED, token=token, url=url)

    @classmethod
    def use_native(cls) -> "GateState":
        return cls(GateStatus.USE_NATIVE)

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    @property
    def show_loader(self) -> bool:
        """The shell keeps its loading indicator up until a terminal state."""
        return not self.is_terminal

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "token": self.token,
            "url": self.url,
            "show_loader": self.show_loader,
            "terminal": self.is_terminal,
        }
