from graph.state import JobcanState
from services.slack_client import status_label


MESSAGES = {
    "touch": "✅ 打刻しました（{time}）。現在のステータス: {status}",
    "login": "Logged In!",
    "status": "現在のステータス: {status}",
}


def slack_notify_node(state: JobcanState, notifier=None) -> dict:
    """操作結果を通知するノード"""
    action = state["action_taken"]

    if action == "error":
        notifier.send_error(state["error_message"])
        return {}

    template = MESSAGES.get(action)
    if template is None:
        return {}

    status = state.get("current_status")
    msg = template.format(
        time=state.get("timestamp") or "",
        status=status_label(status) if status else "不明",
    )
    notifier.send(msg)
    return {}
