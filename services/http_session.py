import logging
from dataclasses import dataclass, field
from typing import Optional

import httpx

from services.errors import NetworkError
from services.secret_store import CSRF_TOKEN_KEY, SecretStore

logger = logging.getLogger(__name__)


@dataclass
class HttpResponse:
    status: int
    body: str
    headers: dict = field(default_factory=dict)
    url: str = ""


class HttpSession:
    """ジョブカンへのリクエストを1つのCookieJarで送るクライアント

    Cookieはプロセスが生きている間だけ保持し、ディスクには書かない。
    """

    def __init__(
        self,
        store: SecretStore,
        timeout_seconds: float = 15,
        user_agent: str = "jobcan-agent/0.1",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._store = store
        self._client = httpx.AsyncClient(
            timeout=timeout_seconds,
            follow_redirects=True,
            headers={"User-Agent": user_agent},
            transport=transport,
        )

    async def get(self, url: str) -> HttpResponse:
        return await self._send("GET", url)

    async def post(self, url: str, form_fields: dict) -> HttpResponse:
        headers = {}
        csrf_token = self._store.get(CSRF_TOKEN_KEY)
        if csrf_token:
            headers["X-CSRF-Token"] = csrf_token
        return await self._send("POST", url, data=form_fields, headers=headers)

    async def _send(self, method: str, url: str, **kwargs) -> HttpResponse:
        try:
            resp = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise NetworkError(str(e) or e.__class__.__name__) from e

        logger.debug("%s %s -> %d", method, url, resp.status_code)
        return HttpResponse(
            status=resp.status_code,
            body=resp.text,
            headers=dict(resp.headers),
            url=str(resp.url),
        )

    async def close(self) -> None:
        await self._client.aclose()
