import logging

from graph.state import JobcanState
from services.errors import JobcanError
from services.stamper_interface import StamperInterface

logger = logging.getLogger(__name__)


async def stamp_node(state: JobcanState, stamper: StamperInterface = None) -> dict:
    """コマンドに応じてログイン・ステータス取得・打刻を実行するノード"""
    command = state["command"]

    try:
        if command == "touch":
            result = await stamper.touch()
        elif command == "login":
            result = await stamper.login()
        elif command == "status":
            result = await stamper.read_status()
        else:
            return {"action_taken": "error", "error_message": f"不明なコマンド: {command}"}
    except JobcanError as e:
        logger.info("%s failed: %s", command, e)
        return {"action_taken": "error", "error_message": str(e)}

    if not result.success:
        return {"action_taken": "error", "error_message": result.error}

    return {
        "action_taken": command,
        "current_status": result.status,
        "timestamp": result.timestamp,
        "error_message": None,
    }
