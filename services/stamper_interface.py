from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class StampResult:
    success: bool
    timestamp: str
    status: Optional[str]
    error: Optional[str] = None


class StamperInterface(ABC):
    """打刻サービスの抽象インターフェース"""

    @abstractmethod
    async def login(self) -> StampResult:
        """ログインのみ実行"""
        ...

    @abstractmethod
    async def read_status(self) -> StampResult:
        """現在の勤務ステータスを取得"""
        ...

    @abstractmethod
    async def touch(self) -> StampResult:
        """打刻（出勤・退勤の切り替え）"""
        ...

    @abstractmethod
    async def close(self) -> None:
        """リソース解放"""
        ...
