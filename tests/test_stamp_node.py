import pytest
from unittest.mock import AsyncMock
from services.errors import LoginFailedError, UnexpectedServerStateError
from services.stamper_interface import StampResult
from graph.nodes.stamp_node import stamp_node


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


@pytest.mark.asyncio
async def test_stamp_touch_success():
    """打刻が成功した場合の状態更新"""
    mock_stamper = AsyncMock()
    mock_stamper.touch.return_value = StampResult(
        success=True, timestamp="09:12", status="working"
    )

    result = await stamp_node(_make_state(command="touch"), stamper=mock_stamper)

    assert result["action_taken"] == "touch"
    assert result["current_status"] == "working"
    assert result["timestamp"] == "09:12"
    assert result["error_message"] is None


@pytest.mark.asyncio
async def test_stamp_login():
    mock_stamper = AsyncMock()
    mock_stamper.login.return_value = StampResult(
        success=True, timestamp="08:59", status="resting"
    )

    result = await stamp_node(_make_state(command="login"), stamper=mock_stamper)

    assert result["action_taken"] == "login"
    mock_stamper.touch.assert_not_called()


@pytest.mark.asyncio
async def test_stamp_status():
    mock_stamper = AsyncMock()
    mock_stamper.read_status.return_value = StampResult(
        success=True, timestamp="12:00", status="having_breakfast"
    )

    result = await stamp_node(_make_state(command="status"), stamper=mock_stamper)

    assert result["current_status"] == "having_breakfast"


@pytest.mark.asyncio
async def test_stamp_login_failed():
    """ログイン失敗はエラー状態になること"""
    mock_stamper = AsyncMock()
    mock_stamper.touch.side_effect = LoginFailedError()

    result = await stamp_node(_make_state(command="touch"), stamper=mock_stamper)

    assert result["action_taken"] == "error"
    assert result["error_message"] == LoginFailedError.message


@pytest.mark.asyncio
async def test_stamp_unexpected_state():
    mock_stamper = AsyncMock()
    mock_stamper.touch.side_effect = UnexpectedServerStateError("result=0 state=0")

    result = await stamp_node(_make_state(command="touch"), stamper=mock_stamper)

    assert result["action_taken"] == "error"
    assert "result=0" in result["error_message"]
    assert "current_status" not in result


@pytest.mark.asyncio
async def test_stamp_unknown_command():
    result = await stamp_node(_make_state(command="dance"), stamper=AsyncMock())
    assert result["action_taken"] == "error"
