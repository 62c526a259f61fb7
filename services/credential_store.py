"""
Persisted key-value state: the API key and the access flag
"""
import json
import logging
from pathlib import Path
from typing import Dict, Optional, Tuple

from config import settings

logger = logging.getLogger(__name__)

CREDENTIAL_KEY = "gemini_api_key"
ACCESS_FLAG_KEY = "app_authenticated"


class KeyValueStore:
    """
    String key-value store backed by a single JSON file.

    The whole file is re-read on every access so that edits made by another
    process are picked up. A missing file or key means "unset".
    """

    def __init__(self, path: Optional[str] = None):
        self.path = Path(path or settings.state_file)

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable state file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _save(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)


class CredentialStore:
    """
    Resolves the API key and keeps the access flag.

    The stored credential takes precedence over the environment fallback.
    The access gate is a convenience for the UI only; it protects nothing.
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        fallback_credential: Optional[str] = None,
        access_code: Optional[str] = None
    ):
        self.store = store or KeyValueStore()
        self.fallback_credential = fallback_credential
        self.access_code = access_code

    @classmethod
    def from_settings(cls) -> "CredentialStore":
        return cls(
            store=KeyValueStore(settings.state_file),
            fallback_credential=settings.gemini_api_key,
            access_code=settings.access_code
        )

    def get_stored_credential(self) -> Optional[str]:
        return self.store.get(CREDENTIAL_KEY) or None

    def set_credential(self, api_key: str) -> None:
        self.store.set(CREDENTIAL_KEY, api_key)
        logger.info("Stored API key updated")

    def clear_credential(self) -> None:
        self.store.remove(CREDENTIAL_KEY)
        logger.info("Stored API key cleared")

    def resolve_credential(self) -> Tuple[Optional[str], str]:
        """
        Return the credential to use and where it came from.

        Returns:
            Tuple of (credential, source) where source is 'stored',
            'environment' or 'none'
        """
        stored = self.get_stored_credential()
        if stored:
            return stored, "stored"
        if self.fallback_credential:
            return self.fallback_credential, "environment"
        return None, "none"

    # Access gate

    @property
    def access_required(self) -> bool:
        return bool(self.access_code)

    def is_unlocked(self) -> bool:
        if not self.access_required:
            return True
        return self.store.get(ACCESS_FLAG_KEY) == "true"

    def unlock(self, code: str) -> bool:
        if not self.access_required:
            return True
        if code != self.access_code:
            logger.warning("Rejected access code")
            return False
        self.store.set(ACCESS_FLAG_KEY, "true")
        return True

    def lock(self) -> None:
        self.store.remove(ACCESS_FLAG_KEY)
