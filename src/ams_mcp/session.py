"""Local storage file and the logged-in session guard."""

import json
import logging
from pathlib import Path
from typing import Optional, Union

from .client import AmsAuthError

logger = logging.getLogger(__name__)

LOGGED_IN_KEY = "isLoggedIn"
REDIRECT_PATH = "/"


class LocalStorage:
    """String key/value store persisted as a JSON object in a single file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable storage file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def get_item(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)


class SessionGuard:
    """Gate for the views: only a stored ``isLoggedIn`` of ``"true"`` passes."""

    def __init__(self, storage: LocalStorage):
        self.storage = storage

    def is_authenticated(self) -> bool:
        return self.storage.get_item(LOGGED_IN_KEY) == "true"

    def require(self) -> None:
        """Raise if there is no logged-in session.

        Raises:
            AmsAuthError: If the session flag is missing or not ``"true"``
        """
        if not self.is_authenticated():
            raise AmsAuthError(
                f"Not logged in - redirecting to {REDIRECT_PATH}. Run 'ams login' first."
            )

    def login(self) -> None:
        self.storage.set_item(LOGGED_IN_KEY, "true")

    def logout(self) -> None:
        self.storage.remove_item(LOGGED_IN_KEY)
