"""
Authentication state interface
"""

from abc import ABC, abstractmethod
from typing import Optional


class AuthenticationState(ABC):
    """Read-only view of whether the session holds a customer token"""

    @property
    @abstractmethod
    def is_authenticated(self) -> bool:
        """True when a bearer token is present"""

    @property
    @abstractmethod
    def token(self) -> Optional[str]:
        """The bearer token, if any"""
