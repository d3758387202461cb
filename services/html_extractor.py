"""ジョブカンのHTMLから必要な値だけを取り出すヘルパー

どの関数も要素が見つからない場合は空文字 / None を返し、例外は投げない。
空をどう扱うか（未ログイン / 未描画）は呼び出し側が決める。
"""
import json
import re
from dataclasses import dataclass
from typing import Iterable, Optional

from bs4 import BeautifulSoup

STATUS_MARKER = "current_status"

_STATUS_RE = re.compile(
    r"""\bcurrent_status["']?\s*[:=]\s*(?P<value>"(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*')"""
)
_GROUP_RE = re.compile(
    r"""\bdefaultAditGroupId["']?\s*[:=]\s*["']?(?P<value>-?\d+)["']?"""
)


@dataclass(frozen=True)
class AttendanceStatus:
    group_id: int
    status: str


def _soup(markup: str) -> BeautifulSoup:
    return BeautifulSoup(markup or "", "html.parser")


def extract_meta(markup: str, name: str) -> str:
    """<meta name=...> の content を返す"""
    tag = _soup(markup).find("meta", attrs={"name": name})
    if tag is None:
        return ""
    return tag.get("content", "") or ""


def extract_input_value(markup: str, input_name: str) -> str:
    """<input name=...> の value を返す"""
    tag = _soup(markup).find("input", attrs={"name": input_name})
    if tag is None:
        return ""
    return tag.get("value", "") or ""


def extract_title(markup: str) -> str:
    tag = _soup(markup).find("title")
    if tag is None:
        return ""
    return tag.get_text().strip()


def has_input(markup: str, names: Iterable[str]) -> bool:
    """name に指定語を含む <input> が1つでもあれば True"""
    needles = [n.lower() for n in names]
    for tag in _soup(markup).find_all("input"):
        input_name = (tag.get("name") or "").lower()
        if any(needle in input_name for needle in needles):
            return True
    return False


def _decode_string_literal(literal: str) -> str:
    body = literal[1:-1]
    if literal.startswith("'"):
        # JSONとして読めるよう単引用符リテラルを二重引用符に揃える
        body = body.replace("\\'", "'").replace('"', '\\"')
    return json.loads(f'"{body}"')


def extract_status_block(markup: str) -> Optional[AttendanceStatus]:
    """打刻画面に埋め込まれたスクリプトから打刻グループIDと現在のステータスを読む

    スクリプトは実行せず、current_status を含む <script> の中から
    2つの値だけを正規表現で取り出してリテラルとしてデコードする。
    """
    for script in _soup(markup).find_all("script"):
        text = script.string or script.get_text()
        if not text or STATUS_MARKER not in text:
            continue

        status_match = _STATUS_RE.search(text)
        group_match = _GROUP_RE.search(text)
        if not status_match or not group_match:
            continue

        try:
            status = _decode_string_literal(status_match.group("value"))
        except json.JSONDecodeError:
            continue
        return AttendanceStatus(group_id=int(group_match.group("value")), status=status)

    return None
