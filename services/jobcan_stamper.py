import json
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from services.errors import ParseError, UnexpectedServerStateError
from services.jobcan_auth import JobcanAuthenticator
from services.secret_store import ADIT_TOKEN_KEY
from services.session_context import SessionContext
from services.stamper_interface import StamperInterface, StampResult
from services.status_reader import StatusReader

logger = logging.getLogger(__name__)

RESULT_OK = 1


@dataclass
class ClockResponse:
    result: int
    state: Optional[int]
    current_status: str


def parse_clock_response(body: str) -> ClockResponse:
    """打刻APIのJSONレスポンスを読む"""
    try:
        data = json.loads(body)
        state = data.get("state")
        return ClockResponse(
            result=int(data["result"]),
            state=int(state) if state is not None else None,
            current_status=str(data["current_status"]),
        )
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        raise ParseError(f"打刻レスポンスを解釈できません ({e})") from e


def _now_str() -> str:
    """テスト時にモック可能"""
    return datetime.now().strftime("%H:%M")


class JobcanStamper(StamperInterface):
    """ジョブカンのWeb APIで打刻する

    各操作は SessionContext.lock の中で「ログイン → ステータス取得 → 打刻」を
    順に await し、途中で例外が出たらそこで打ち切る。
    """

    def __init__(self, session: SessionContext):
        self._session = session
        self._auth = JobcanAuthenticator(session)
        self._status_reader = StatusReader(session)

    def set_night_shift(self, enabled: bool) -> None:
        self._session.night_shift = enabled

    async def login(self) -> StampResult:
        async with self._session.lock:
            result = await self._auth.login()
        status = result.status.status if result.status else None
        return StampResult(success=True, timestamp=_now_str(), status=status)

    async def read_status(self) -> StampResult:
        async with self._session.lock:
            await self._auth.login()
            status = await self._status_reader.read()
        return StampResult(success=True, timestamp=_now_str(), status=status.status)

    async def touch(self) -> StampResult:
        async with self._session.lock:
            await self._auth.login()
            current = await self._status_reader.read()
            response = await self._post_adit(current.group_id)

        logger.info("Touched: %s -> %s", current.status, response.current_status)
        return StampResult(success=True, timestamp=_now_str(), status=response.current_status)

    async def _post_adit(self, default_group_id: int) -> ClockResponse:
        session = self._session
        jobcan = session.settings["jobcan"]
        group_id = session.group_id if session.group_id is not None else default_group_id

        form = {
            "is_yakin": "1" if session.night_shift else "0",
            "adit_item": jobcan["adit_item"],
            "notice": session.settings["touch"].get("notice", ""),
            "token": session.store.get(ADIT_TOKEN_KEY) or "",
            "adit_group_id": str(group_id),
        }
        resp = await session.http.post(jobcan["adit_url"], form)
        response = parse_clock_response(resp.body)
        if response.result != RESULT_OK:
            raise UnexpectedServerStateError(
                f"result={response.result} state={response.state}"
            )
        return response

    async def close(self) -> None:
        await self._session.http.close()
