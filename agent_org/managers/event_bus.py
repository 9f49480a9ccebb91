"""プロセス内イベントバス。

イベント種類ごとにハンドラを登録し、publish 時に登録順で同期的に呼び出す。
ハンドラの例外は他のハンドラや発行側に伝播させず、ログに残して戻り値で返す。
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from agent_org.models.events import EventKind

logger = logging.getLogger(__name__)

Handler = Callable[[Any], None]
Unsubscribe = Callable[[], None]


@dataclass(frozen=True)
class HandlerError:
    """ハンドラ実行時に発生した例外。"""

    kind: EventKind
    handler: Handler
    error: Exception


class EventBus:
    """イベント種類ごとの購読を管理するクラス。"""

    def __init__(self) -> None:
        self._handlers: dict[EventKind, list[Handler]] = {}

    def subscribe(self, kind: EventKind | str, handler: Handler) -> Unsubscribe:
        """ハンドラを登録する。

        同じハンドラを二重に登録しても 1 件として扱う。

        Args:
            kind: イベント種類
            handler: ペイロードを受け取る関数

        Returns:
            登録を解除する関数
        """
        kind = EventKind(kind)
        handlers = self._handlers.setdefault(kind, [])
        if handler not in handlers:
            handlers.append(handler)

        def unsubscribe() -> None:
            current = self._handlers.get(kind)
            if not current or handler not in current:
                return
            current.remove(handler)
            if not current:
                del self._handlers[kind]

        return unsubscribe

    def publish(self, kind: EventKind | str, payload: Any) -> list[HandlerError]:
        """イベントを発行する。

        Args:
            kind: イベント種類
            payload: ハンドラに渡すペイロード（そのまま渡す）

        Returns:
            失敗したハンドラの一覧（全て成功した場合は空）
        """
        kind = EventKind(kind)
        errors: list[HandlerError] = []
        # ハンドラ内での登録・解除に影響されないようスナップショットを回す
        for handler in list(self._handlers.get(kind, ())):
            try:
                handler(payload)
            except Exception as e:
                logger.exception(f"イベントハンドラでエラーが発生しました ({kind.value}): {e}")
                errors.append(HandlerError(kind=kind, handler=handler, error=e))
        return errors

    def handler_count(self, kind: EventKind | str) -> int:
        """登録済みハンドラ数を返す。"""
        return len(self._handlers.get(EventKind(kind), ()))

    def clear(self) -> None:
        """全ての登録を解除する。"""
        self._handlers.clear()
