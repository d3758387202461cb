# graph/graph.py
from langgraph.graph import StateGraph, END
from graph.state import JobcanState


def route_after_credentials_check(state: JobcanState) -> str:
    if not state["has_credentials"]:
        return "notify"
    return "stamp"


def build_graph(stamper=None, notifier=None, secrets=None):
    """LangGraphのグラフを構築して返す

    各ノード関数はサービス依存を持つため、functools.partialでラップして
    LangGraphが期待する (state) -> dict シグネチャに合わせる。
    secrets を省略すると認証情報チェックを素通しする（ダミー打刻用）。
    """
    from functools import partial
    from graph.nodes.credentials_check_node import credentials_check_node
    from graph.nodes.stamp_node import stamp_node
    from graph.nodes.slack_notify_node import slack_notify_node

    credentials_check_wrapped = partial(credentials_check_node, secrets=secrets)
    stamp_wrapped = partial(stamp_node, stamper=stamper)
    notify_wrapped = partial(slack_notify_node, notifier=notifier)

    workflow = StateGraph(JobcanState)

    workflow.add_node("credentials_check", credentials_check_wrapped)
    workflow.add_node("stamp", stamp_wrapped)
    workflow.add_node("notify", notify_wrapped)

    workflow.set_entry_point("credentials_check")

    workflow.add_conditional_edges(
        "credentials_check",
        route_after_credentials_check,
        {"stamp": "stamp", "notify": "notify"},
    )

    workflow.add_edge("stamp", "notify")
    workflow.add_edge("notify", END)

    return workflow.compile()


def initial_state(command: str) -> JobcanState:
    return {
        "command": command,
        "has_credentials": False,
        "current_status": None,
        "timestamp": None,
        "action_taken": None,
        "error_message": None,
    }
