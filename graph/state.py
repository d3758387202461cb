from typing import TypedDict, Optional


class JobcanState(TypedDict):
    command: str                        # "touch" / "login" / "status"
    has_credentials: bool               # ユーザー名・パスワード設定済み
    current_status: Optional[str]       # 操作後の勤務ステータス
    timestamp: Optional[str]            # 操作時刻 HH:MM
    action_taken: Optional[str]         # "touch" / "login" / "status" / "error"
    error_message: Optional[str]        # エラー詳細
