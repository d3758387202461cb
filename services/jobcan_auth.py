import enum
import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

from services.errors import (
    LoginFailedError,
    MissingCredentialsError,
    ParseError,
    SecondFactorRequiredError,
)
from services.html_extractor import (
    AttendanceStatus,
    extract_input_value,
    extract_meta,
    extract_status_block,
    extract_title,
    has_input,
)
from services.secret_store import (
    ADIT_TOKEN_KEY,
    CSRF_TOKEN_KEY,
    PASSWORD_KEY,
    USERNAME_KEY,
)
from services.session_context import SessionContext

logger = logging.getLogger(__name__)

AUTHENTICATED_TITLE_PREFIX = "JOBCAN MyPage:"


class AuthState(enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    CSRF_ACQUIRED = "csrf_acquired"
    LOGIN_SUBMITTED = "login_submitted"
    AUTHENTICATED = "authenticated"
    LOGIN_FAILED = "login_failed"
    REQUIRES_SECOND_FACTOR = "requires_second_factor"


@dataclass
class AuthResult:
    state: AuthState
    action_token: str
    status: Optional[AttendanceStatus] = None


def is_authenticated_page(title: str, prefix: str = AUTHENTICATED_TITLE_PREFIX) -> bool:
    """ログイン後のマイページかどうかをタイトルの接頭辞で判定する"""
    return title.startswith(prefix)


class JobcanAuthenticator:
    """ジョブカンIDへのログインと打刻用トークンの取得"""

    def __init__(self, session: SessionContext):
        self._session = session
        self._jobcan = session.settings["jobcan"]
        self._markers = session.settings["auth"]["second_factor_markers"]
        self.state = AuthState.UNAUTHENTICATED

    async def login(self) -> AuthResult:
        """ログインして打刻用トークンを保存する

        呼び出し側で session.lock を取っておくこと。
        """
        store = self._session.store
        http = self._session.http
        self.state = AuthState.UNAUTHENTICATED

        username = store.get(USERNAME_KEY)
        password = store.get(PASSWORD_KEY)
        if not username or not password:
            raise MissingCredentialsError()

        page = await http.get(self._jobcan["login_url"])
        store.set(CSRF_TOKEN_KEY, extract_meta(page.body, "csrf-token"))
        self.state = AuthState.CSRF_ACQUIRED

        form = {
            "authenticity_token": store.get(CSRF_TOKEN_KEY) or "",
            "user[email]": username,
            "user[client_code]": self._jobcan["client_code"],
            "user[password]": password,
            "save_sign_in_information": "true",
            "app_key": self._jobcan["app_key"],
            "commit": self._jobcan["submit_label"],
        }
        resp = await http.post(self._jobcan["login_url"], form)
        self.state = AuthState.LOGIN_SUBMITTED

        # レスポンスごとに新しいCSRFトークンが発行される
        store.set(CSRF_TOKEN_KEY, extract_meta(resp.body, "csrf-token"))

        title = extract_title(resp.body)
        if not is_authenticated_page(title, self._jobcan["authenticated_title_prefix"]):
            if self._requires_second_factor(resp.body, resp.url):
                self.state = AuthState.REQUIRES_SECOND_FACTOR
                logger.warning("Second factor requested for %s", resp.url)
                raise SecondFactorRequiredError()
            self.state = AuthState.LOGIN_FAILED
            logger.info("Login rejected (title=%r)", title)
            raise LoginFailedError()

        self.state = AuthState.AUTHENTICATED
        logger.info("Logged in to Jobcan")

        landing = await http.get(self._jobcan["employee_url"])
        landing_csrf = extract_meta(landing.body, "csrf-token")
        if landing_csrf:
            store.set(CSRF_TOKEN_KEY, landing_csrf)

        action_token = extract_input_value(landing.body, "token")
        if not action_token:
            raise ParseError("打刻用トークンが見つかりません")
        store.set(ADIT_TOKEN_KEY, action_token)

        return AuthResult(
            state=self.state,
            action_token=action_token,
            status=extract_status_block(landing.body),
        )

    def _requires_second_factor(self, markup: str, url: str) -> bool:
        path = urlsplit(url).path.lower()
        if any(marker in path for marker in self._markers):
            return True
        return has_input(markup, self._markers)
