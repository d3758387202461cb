import yaml
from copy import deepcopy
from pathlib import Path

DEFAULT_CONFIG = {
    "jobcan": {
        "login_url": "https://id.jobcan.jp/users/sign_in",
        "employee_url": "https://ssl.jobcan.jp/employee",
        "adit_url": "https://ssl.jobcan.jp/employee/index/adit",
        "app_key": "atd",
        "client_code": "",
        "submit_label": "ログイン",
        "authenticated_title_prefix": "JOBCAN MyPage:",
        "adit_item": "DEF",
    },
    "http": {
        "timeout_seconds": 15,
        "user_agent": "jobcan-agent/0.1",
    },
    "touch": {
        "night_shift": False,
        "group_id": None,
        "notice": "",
    },
    "auth": {
        "second_factor_markers": ["two_factor", "otp", "mfa", "verification_code"],
    },
    "secrets": {
        "path": ".jobcan_secrets.yaml",
    },
    "stamper": "jobcan",
    "slack": {
        "enabled": False,
        "notify_channel": "",
    },
    "logging": {
        "level": "INFO",
    },
}


def _deep_merge(base: dict, override: dict) -> dict:
    """ベース設定にオーバーライドをマージする"""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(path: str = "config.yaml") -> dict:
    """YAML設定ファイルをロードし、デフォルト設定とマージして返す"""
    config_path = Path(path)
    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            user_config = yaml.safe_load(f) or {}
        return _deep_merge(deepcopy(DEFAULT_CONFIG), user_config)
    return deepcopy(DEFAULT_CONFIG)
