"""
Selected API key state.

The key lives in a mutable mapping (Streamlit's `st.session_state` in the app,
a plain dict in tests) and is handed explicitly to each generation call.
"""

from __future__ import annotations

from typing import MutableMapping, Optional

from .errors import ValidationError
from .gemini_client import get_env_api_key
from .utils import get_logger

logger = get_logger("credentials")

SESSION_KEY = "selected_api_key"


class CredentialStore:
    """Read and select the API key for the current session."""

    def __init__(self, state: MutableMapping, *, key: str = SESSION_KEY, default: Optional[str] = None):
        self._state = state
        self._key = key
        if key not in state:
            seeded = default if default is not None else get_env_api_key()
            state[key] = seeded or None
            if seeded:
                logger.info("API key seeded from environment")

    @property
    def api_key(self) -> Optional[str]:
        return self._state.get(self._key)

    def has_selected_key(self) -> bool:
        return bool(self.api_key)

    async def select_key(self, value: Optional[str]) -> str:
        """
        Make `value` the active key.

        Raises:
            ValidationError: if value is blank
        """
        if not value or not value.strip():
            raise ValidationError("Please enter an API key.")
        self._state[self._key] = value.strip()
        logger.info("API key selected")
        return self._state[self._key]

    def clear(self) -> None:
        """Forget the key, e.g. after the service rejected it."""
        self._state[self._key] = None
        logger.info("API key cleared")

    def require(self) -> str:
        if not self.has_selected_key():
            raise ValidationError("An API key is required. Please select your key to proceed.")
        return self.api_key
