class JobcanError(Exception):
    """ジョブカン連携で発生するエラーの基底クラス"""

    message = "ジョブカンとの通信でエラーが発生しました"

    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__(f"{self.message}: {detail}" if detail else self.message)


class NetworkError(JobcanError):
    message = "ネットワークエラーが発生しました"


class MissingCredentialsError(JobcanError):
    message = "ユーザー名もしくはパスワードが設定されていません。"


class LoginFailedError(JobcanError):
    message = "Login Failed. Check your username or password."


class SecondFactorRequiredError(JobcanError):
    message = "二段階認証が要求されました（未対応）。ブラウザからログインしてください"


class ParseError(JobcanError):
    message = "ページの解析に失敗しました"


class UnexpectedServerStateError(JobcanError):
    message = "打刻がサーバーに受け付けられませんでした"
