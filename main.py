"""ジョブカン打刻エージェント - エントリーポイント"""
import argparse
import asyncio
import logging
import os
import sys

from dotenv import load_dotenv

from services.config_loader import load_config
from services.prompt import ConsolePrompt
from services.secret_store import PASSWORD_KEY, USERNAME_KEY, YamlSecretStore
from services.session_context import SessionContext
from services.slack_client import SlackNotifier, ConsoleNotifier
from graph.graph import build_graph, initial_state

logger = logging.getLogger("jobcan_agent")


def setup_logging(config: dict):
    logging.basicConfig(
        level=config["logging"]["level"],
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def create_services(config: dict):
    """設定に基づいてサービスインスタンスを生成"""
    load_dotenv()

    secrets = YamlSecretStore(config["secrets"]["path"])
    for key, env_name in ((USERNAME_KEY, "JOBCAN_USERNAME"), (PASSWORD_KEY, "JOBCAN_PASSWORD")):
        value = os.getenv(env_name)
        if value:
            secrets.override(key, value)

    # 通知
    slack_config = config["slack"]
    slack_token = os.getenv("SLACK_BOT_TOKEN", "")
    slack_channel = os.getenv("SLACK_NOTIFY_CHANNEL", slack_config.get("notify_channel", ""))
    if slack_config["enabled"] and slack_token:
        notifier = SlackNotifier(token=slack_token, channel=slack_channel)
    else:
        notifier = ConsoleNotifier()

    return secrets, notifier


def create_stamper(config: dict, secrets, transport=None):
    """打刻サービスを生成"""
    if config["stamper"] == "dummy":
        from services.dummy_stamper import DummyStamper
        stamper = DummyStamper()
    else:
        from services.jobcan_stamper import JobcanStamper
        session = SessionContext.from_config(config, secrets, transport=transport)
        stamper = JobcanStamper(session)
    return stamper


def set_username(secrets, notifier, prompt) -> int:
    username = prompt.ask_text(
        "メールアドレスまたはスタッフコードを入力してください", placeholder="test@example.net"
    )
    secrets.set(USERNAME_KEY, username or "")
    notifier.send("Set jobcan's username!")
    return 0


def set_password(secrets, notifier, prompt) -> int:
    password = prompt.ask_password("パスワードを入力してください")
    secrets.set(PASSWORD_KEY, password or "")
    notifier.send("Set jobcan's password!")
    return 0


async def run_command(command: str, secrets, notifier, stamper, check_credentials: bool = True) -> int:
    """グラフを1回実行し、終了コードを返す"""
    graph = build_graph(
        stamper=stamper,
        notifier=notifier,
        secrets=secrets if check_credentials else None,
    )
    try:
        final_state = await graph.ainvoke(initial_state(command))
    finally:
        await stamper.close()
    return 1 if final_state["action_taken"] == "error" else 0


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="JOBCAN 打刻ツール")
    parser.add_argument("--config", default="config.yaml", help="設定ファイル (YAML)")

    sub = parser.add_subparsers(dest="command", required=True)

    touch = sub.add_parser("touch", help="打刻（出勤・退勤の切り替え）")
    touch.add_argument("--night-shift", action="store_true", help="夜勤として打刻")
    touch.add_argument("--group-id", type=int, default=None, help="打刻グループID")

    sub.add_parser("login", help="ログインのみ実行")
    sub.add_parser("status", help="現在のステータスを表示")
    sub.add_parser("set-username", help="ユーザー名を設定")
    sub.add_parser("set-password", help="パスワードを設定")

    return parser.parse_args(argv)


def main(argv=None, prompt=None) -> int:
    """メイン起動処理"""
    args = parse_args(argv)
    config = load_config(args.config)
    setup_logging(config)

    if args.command == "touch":
        if args.night_shift:
            config["touch"]["night_shift"] = True
        if args.group_id is not None:
            config["touch"]["group_id"] = args.group_id

    secrets, notifier = create_services(config)
    prompt = prompt or ConsolePrompt()

    if args.command == "set-username":
        return set_username(secrets, notifier, prompt)
    if args.command == "set-password":
        return set_password(secrets, notifier, prompt)

    stamper = create_stamper(config, secrets)
    logger.info("=== %s 開始 ===", args.command)
    try:
        return asyncio.run(
            run_command(
                args.command,
                secrets,
                notifier,
                stamper,
                check_credentials=config["stamper"] != "dummy",
            )
        )
    except KeyboardInterrupt:
        notifier.send_error("中断しました")
        return 130


if __name__ == "__main__":
    sys.exit(main())
