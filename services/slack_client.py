import logging
import sys

logger = logging.getLogger(__name__)

STATUS_LABELS = {
    "working": "勤務中",
    "resting": "退室中",
    "having_breakfast": "休憩中",
}


def status_label(status: str) -> str:
    """ジョブカンのステータス値を表示用の文言にする"""
    return STATUS_LABELS.get(status, status)


class ConsoleNotifier:
    """コンソール出力による通知（フォールバック用）"""

    def send(self, message: str) -> bool:
        print(f"[ジョブカン] {message}", file=sys.stdout)
        return True

    def send_error(self, error: str) -> bool:
        print(f"[ジョブカン エラー] {error}", file=sys.stderr)
        return True


class SlackNotifier:
    """Slack APIによる通知サービス"""

    def __init__(self, token: str, channel: str):
        self._channel = channel
        self._client = None
        self._fallback = ConsoleNotifier()

        if token:
            from slack_sdk import WebClient
            self._client = WebClient(token=token)

    def send(self, message: str) -> bool:
        """メッセージ送信（クライアント未設定時はコンソールへ）"""
        if self._client is None:
            return self._fallback.send(message)

        from slack_sdk.errors import SlackApiError
        try:
            self._client.chat_postMessage(channel=self._channel, text=message)
            return True
        except SlackApiError as e:
            logger.warning("Slack post failed: %s", e)
            return False

    def send_error(self, error: str) -> bool:
        message = f"❌ ジョブカンの操作に失敗しました（エラー: {error}）"
        return self.send(message)
