from unittest.mock import MagicMock
from graph.nodes.slack_notify_node import slack_notify_node


def _make_state(**overrides):
    base = {
        "command": "touch",
        "has_credentials": True,
        "current_status": None,
        "timestamp": None,
        "action_taken": None,
        "error_message": None,
    }
    base.update(overrides)
    return base


def test_notify_touch():
    """打刻成功の通知"""
    mock_notifier = MagicMock()
    mock_notifier.send.return_value = True

    state = _make_state(action_taken="touch", timestamp="09:12", current_status="working")
    slack_notify_node(state, notifier=mock_notifier)

    mock_notifier.send.assert_called_once()
    call_msg = mock_notifier.send.call_args[0][0]
    assert "打刻" in call_msg
    assert "09:12" in call_msg
    assert "勤務中" in call_msg


def test_notify_login():
    mock_notifier = MagicMock()

    state = _make_state(command="login", action_taken="login")
    slack_notify_node(state, notifier=mock_notifier)

    mock_notifier.send.assert_called_once_with("Logged In!")


def test_notify_status():
    mock_notifier = MagicMock()

    state = _make_state(command="status", action_taken="status", current_status="resting")
    slack_notify_node(state, notifier=mock_notifier)

    assert "退室中" in mock_notifier.send.call_args[0][0]


def test_notify_error():
    """エラー通知"""
    mock_notifier = MagicMock()
    mock_notifier.send_error.return_value = True

    state = _make_state(action_taken="error", error_message="タイムアウト")
    slack_notify_node(state, notifier=mock_notifier)

    mock_notifier.send_error.assert_called_once_with("タイムアウト")
    mock_notifier.send.assert_not_called()


def test_notify_nothing_taken():
    mock_notifier = MagicMock()

    slack_notify_node(_make_state(), notifier=mock_notifier)

    mock_notifier.send.assert_not_called()
    mock_notifier.send_error.assert_not_called()
