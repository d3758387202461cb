import logging
from datetime import datetime

from services.stamper_interface import StamperInterface, StampResult

logger = logging.getLogger(__name__)


class DummyStamper(StamperInterface):
    """ダミー打刻（ログ出力のみ）。ジョブカンに接続せず動作確認するための実装。"""

    def __init__(self, status: str = "resting"):
        self._status = status

    async def login(self) -> StampResult:
        timestamp = datetime.now().strftime("%H:%M")
        logger.info("[DummyStamper] ログイン（シミュレーション）: %s", timestamp)
        return StampResult(success=True, timestamp=timestamp, status=self._status)

    async def read_status(self) -> StampResult:
        timestamp = datetime.now().strftime("%H:%M")
        return StampResult(success=True, timestamp=timestamp, status=self._status)

    async def touch(self) -> StampResult:
        timestamp = datetime.now().strftime("%H:%M")
        self._status = "resting" if self._status == "working" else "working"
        logger.info("[DummyStamper] 打刻（シミュレーション）: %s -> %s", timestamp, self._status)
        return StampResult(success=True, timestamp=timestamp, status=self._status)

    async def close(self) -> None:
        pass
