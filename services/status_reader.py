import logging

from services.errors import ParseError
from services.html_extractor import (
    AttendanceStatus,
    extract_input_value,
    extract_meta,
    extract_status_block,
)
from services.secret_store import ADIT_TOKEN_KEY, CSRF_TOKEN_KEY
from services.session_context import SessionContext

logger = logging.getLogger(__name__)


class StatusReader:
    """打刻画面から現在の勤務ステータスを読む"""

    def __init__(self, session: SessionContext):
        self._session = session
        self._employee_url = session.settings["jobcan"]["employee_url"]

    async def read(self) -> AttendanceStatus:
        page = await self._session.http.get(self._employee_url)

        # ページを取り直したらCSRFトークンと打刻用トークンも差し替える
        csrf_token = extract_meta(page.body, "csrf-token")
        if csrf_token:
            self._session.store.set(CSRF_TOKEN_KEY, csrf_token)
        action_token = extract_input_value(page.body, "token")
        if action_token:
            self._session.store.set(ADIT_TOKEN_KEY, action_token)

        status = extract_status_block(page.body)
        if status is None:
            raise ParseError("勤務ステータスが見つかりません")
        logger.info("Current status: %s (group %d)", status.status, status.group_id)
        return status
