import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

USERNAME_KEY = "username"
PASSWORD_KEY = "password"
CSRF_TOKEN_KEY = "csrf-token"
ADIT_TOKEN_KEY = "adit-token"


class SecretStore(ABC):
    """認証情報・トークンのキーバリューストア"""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...


class MemorySecretStore(SecretStore):
    """プロセス内だけで保持するストア"""

    def __init__(self, initial: Optional[dict] = None):
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class YamlSecretStore(MemorySecretStore):
    """YAMLファイルに永続化するストア（setのたびに上書き保存）

    override した値はメモリ上でだけ優先され、ファイルには書かれない。
    """

    def __init__(self, path: str):
        self._path = Path(path)
        self._overrides: dict[str, str] = {}
        super().__init__(self._load())

    def override(self, key: str, value: str) -> None:
        """環境変数などから渡された値を保存せずに使う"""
        self._overrides[key] = value

    def get(self, key: str) -> Optional[str]:
        if key in self._overrides:
            return self._overrides[key]
        return super().get(key)

    def _load(self) -> dict:
        if not self._path.exists():
            return {}
        with open(self._path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            logger.warning("Secret file %s is not a mapping; ignoring it", self._path)
            return {}
        return {str(k): str(v) for k, v in data.items() if v is not None}

    def set(self, key: str, value: str) -> None:
        super().set(key, value)
        self._overrides.pop(key, None)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, "w", encoding="utf-8") as f:
            yaml.safe_dump(self._values, f, allow_unicode=True)
        os.chmod(self._path, 0o600)
