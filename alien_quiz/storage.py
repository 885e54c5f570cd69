"""
Namespaced key-value persistence for quiz progress.

StorageManager never raises: every backend failure is logged and reported
to the caller as False (writes) or None (reads).
"""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class StorageError(Exception):
    """Base exception for key-value store failures."""
    pass


class StorageQuotaExceededError(StorageError):
    """Raised when a write would exceed the store's capacity."""
    pass


class StorageUnavailableError(StorageError):
    """Raised when the store cannot be read or written at all."""
    pass


class KeyValueStore:
    """Minimal string-to-string store, modelled on browser localStorage."""

    def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove_item(self, key: str) -> None:
        raise NotImplementedError

    def keys(self) -> List[str]:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    """In-process store with an optional size quota in bytes."""

    def __init__(self, quota_bytes: Optional[int] = None):
        self._items: Dict[str, str] = {}
        self._quota_bytes = quota_bytes

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self._quota_bytes is not None:
            used = sum(
                len(k.encode('utf-8')) + len(v.encode('utf-8'))
                for k, v in self._items.items()
                if k != key
            )
            needed = len(key.encode('utf-8')) + len(value.encode('utf-8'))
            if used + needed > self._quota_bytes:
                raise StorageQuotaExceededError(
                    f"Storing '{key}' needs {needed} bytes, {self._quota_bytes - used} available"
                )
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._items.keys())


class JsonFileStore(KeyValueStore):
    """
    Store backed by a single JSON object file on disk.

    Writes go through a temporary file and os.replace so a crash never leaves
    a half-written file behind. A corrupt file fails reads with StorageError
    and is discarded by the next write.
    """

    def __init__(self, file_path: Union[str, Path]):
        self.file_path = Path(file_path)
        self.logger = logging.getLogger(__name__)

    def _read_all(self, strict: bool = True) -> Dict[str, str]:
        if not self.file_path.exists():
            return {}

        try:
            with open(self.file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            if strict:
                raise StorageError(f"Corrupt storage file {self.file_path}: {e}") from e
            self.logger.warning(f"Discarding corrupt storage file {self.file_path}: {e}")
            return {}
        except OSError as e:
            raise StorageUnavailableError(f"Cannot read storage file {self.file_path}: {e}") from e

        if not isinstance(data, dict):
            if strict:
                raise StorageError(f"Storage file {self.file_path} does not contain a JSON object")
            self.logger.warning(f"Discarding storage file {self.file_path}: not a JSON object")
            return {}

        return data

    def _write_all(self, items: Dict[str, str]) -> None:
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=str(self.file_path.parent),
                prefix=self.file_path.name,
                suffix='.tmp'
            )
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    json.dump(items, f, ensure_ascii=False, indent=2)
                os.replace(tmp_path, self.file_path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            raise StorageUnavailableError(f"Cannot write storage file {self.file_path}: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        items = self._read_all(strict=False)
        items[key] = value
        self._write_all(items)

    def remove_item(self, key: str) -> None:
        items = self._read_all(strict=False)
        if key in items:
            del items[key]
            self._write_all(items)

    def keys(self) -> List[str]:
        return list(self._read_all().keys())


class StorageManager:
    """JSON-serialising, namespace-scoped facade over a KeyValueStore."""

    DEFAULT_NAMESPACE = "alienQuiz_"

    def __init__(self, store: Optional[KeyValueStore] = None, namespace: str = DEFAULT_NAMESPACE):
        """
        Initialize the storage manager.

        Args:
            store: Backend store; an in-memory store is used when omitted
            namespace: Prefix applied to every key this manager touches
        """
        self.store = store if store is not None else MemoryStore()
        self.namespace = namespace
        self.logger = logging.getLogger(__name__)

    def _key(self, key: str) -> str:
        return f"{self.namespace}{key}"

    def save(self, key: str, data: Any) -> bool:
        """
        Serialise and store a value.

        Returns:
            True if stored, False if serialisation or the store failed
        """
        try:
            self.store.set_item(self._key(key), json.dumps(data))
            return True
        except (StorageError, OSError, TypeError, ValueError) as e:
            self.logger.warning(f"Could not save '{key}' to storage: {e}")
            return False

    def load(self, key: str) -> Optional[Any]:
        """
        Load and deserialise a value.

        Returns:
            The stored value, or None if it is absent, corrupt or the store failed
        """
        try:
            raw = self.store.get_item(self._key(key))
            return json.loads(raw) if raw else None
        except (StorageError, OSError, TypeError, ValueError) as e:
            self.logger.warning(f"Could not load '{key}' from storage: {e}")
            return None

    def remove(self, key: str) -> bool:
        """Remove one namespaced entry; False if the store failed."""
        try:
            self.store.remove_item(self._key(key))
            return True
        except (StorageError, OSError) as e:
            self.logger.warning(f"Could not remove '{key}' from storage: {e}")
            return False

    def clear(self) -> bool:
        """Remove every entry under this manager's namespace; False if the store failed."""
        try:
            for stored_key in self.store.keys():
                if stored_key.startswith(self.namespace):
                    self.store.remove_item(stored_key)
            return True
        except (StorageError, OSError) as e:
            self.logger.warning(f"Could not clear storage: {e}")
            return False
