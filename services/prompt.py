import getpass


class ConsolePrompt:
    """ターミナルで文字列・パスワードを入力させる"""

    def ask_text(self, title: str, placeholder: str = "") -> str:
        suffix = f" (例: {placeholder})" if placeholder else ""
        return input(f"{title}{suffix}: ").strip()

    def ask_password(self, title: str) -> str:
        return getpass.getpass(f"{title}: ")
