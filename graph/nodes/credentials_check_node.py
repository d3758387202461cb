# graph/nodes/credentials_check_node.py
from graph.state import JobcanState
from services.errors import MissingCredentialsError
from services.secret_store import PASSWORD_KEY, USERNAME_KEY, SecretStore


def credentials_check_node(state: JobcanState, secrets: SecretStore = None) -> dict:
    """ユーザー名・パスワードが設定済みかを確認するノード（通信はしない）"""
    if secrets is None:
        # ダミー打刻では認証情報を使わない
        return {"has_credentials": True}

    if secrets.get(USERNAME_KEY) and secrets.get(PASSWORD_KEY):
        return {"has_credentials": True}

    return {
        "has_credentials": False,
        "action_taken": "error",
        "error_message": MissingCredentialsError.message,
    }
