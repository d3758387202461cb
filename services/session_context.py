import asyncio
from dataclasses import dataclass, field
from typing import Optional

from services.http_session import HttpSession
from services.secret_store import SecretStore


@dataclass
class SessionContext:
    """1プロセス1セッション分の状態をまとめて持つ

    ログイン・ステータス取得・打刻はすべて lock を取ってから実行する。
    並行に走るとCSRFトークンの更新が入れ違い、古いトークンで弾かれるため。
    """
    store: SecretStore
    http: HttpSession
    settings: dict
    night_shift: bool = False
    group_id: Optional[int] = None
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    @classmethod
    def from_config(cls, config: dict, store: SecretStore, transport=None) -> "SessionContext":
        http_config = config["http"]
        touch_config = config["touch"]
        http = HttpSession(
            store,
            timeout_seconds=http_config["timeout_seconds"],
            user_agent=http_config["user_agent"],
            transport=transport,
        )
        return cls(
            store=store,
            http=http,
            settings=config,
            night_shift=bool(touch_config.get("night_shift", False)),
            group_id=touch_config.get("group_id"),
        )
