import json
from copy import deepcopy

import httpx
import pytest

from services.config_loader import DEFAULT_CONFIG
from services.secret_store import MemorySecretStore, PASSWORD_KEY, USERNAME_KEY
from services.session_context import SessionContext

LOGIN_PAGE = """
<html><head>
<title>JOBCAN ID</title>
<meta name="csrf-token" content="csrf-login-page">
</head><body>
<form action="/users/sign_in" method="post">
<input type="text" name="user[email]">
<input type="password" name="user[password]">
</form>
</body></html>
"""

MYPAGE = """
<html><head>
<title>JOBCAN MyPage: ホーム</title>
<meta name="csrf-token" content="csrf-after-login">
</head><body></body></html>
"""

EMPLOYEE_PAGE = """
<html><head><title>JOBCAN 勤怠管理</title>
<meta name="csrf-token" content="csrf-employee">
<script src="/assets/application.js"></script>
</head><body>
<form id="adit"><input type="hidden" name="token" value="adit-token-1"></form>
<script type="text/javascript">
  var defaultAditGroupId = 3;
  var current_status = "resting";
</script>
</body></html>
"""


class FakeJobcan:
    """httpx.MockTransport 用のジョブカン擬似サーバー"""

    def __init__(self, login_response=MYPAGE, adit_response=None):
        self.login_response = login_response
        self.adit_response = adit_response or {"result": 1, "state": 1, "current_status": "working"}
        self.requests: list[httpx.Request] = []

    def count(self, method: str, path: str) -> int:
        return sum(1 for r in self.requests if r.method == method and r.url.path == path)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/users/sign_in" and request.method == "GET":
            return httpx.Response(200, text=LOGIN_PAGE, headers={"Set-Cookie": "_id_session=s1; Path=/"})
        if path == "/users/sign_in" and request.method == "POST":
            return httpx.Response(200, text=self.login_response)
        if path == "/employee" and request.method == "GET":
            return httpx.Response(200, text=EMPLOYEE_PAGE)
        if path == "/employee/index/adit" and request.method == "POST":
            return httpx.Response(
                200,
                text=json.dumps(self.adit_response),
                headers={"Set-Cookie": "_jbc_session=adit; Path=/"},
            )
        return httpx.Response(404, text="not found")


@pytest.fixture
def config():
    return deepcopy(DEFAULT_CONFIG)


@pytest.fixture
def secrets():
    return MemorySecretStore({USERNAME_KEY: "test@example.net", PASSWORD_KEY: "secret"})


@pytest.fixture
def fake_jobcan():
    return FakeJobcan()


@pytest.fixture
def session(config, secrets, fake_jobcan):
    return SessionContext.from_config(
        config, secrets, transport=httpx.MockTransport(fake_jobcan.handler)
    )
