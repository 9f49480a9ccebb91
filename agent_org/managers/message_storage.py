"""メッセージの永続化モジュール。

保存先: {workspace}/messages/{threadId}/{id}.json
スレッドごとにディレクトリを分け、各メッセージは個別の JSON ファイルとする。
"""

import logging
from pathlib import Path

from agent_org.managers.persistence import (
    atomic_write_json,
    list_files,
    list_subdirs,
    read_json,
    remove_file,
)
from agent_org.models.common import utc_now
from agent_org.models.message import Message, MessageStatus

logger = logging.getLogger(__name__)


class MessageStorage:
    """スレッド単位のメッセージ保存を管理するクラス。"""

    def __init__(self, base_path: str | Path) -> None:
        """MessageStorageを初期化する。

        Args:
            base_path: ワークスペースのルート
        """
        self.messages_dir = Path(base_path) / "messages"

    def _get_message_path(self, message_id: str, thread_id: str) -> Path:
        return self.messages_dir / thread_id / f"{message_id}.json"

    def save(self, message: Message) -> None:
        """メッセージを保存する。"""
        atomic_write_json(
            self._get_message_path(message.id, message.thread_id), message.to_record()
        )

    def get(self, message_id: str, thread_id: str) -> Message | None:
        """メッセージを取得する。存在しない場合は None。"""
        data = read_json(self._get_message_path(message_id, thread_id))
        if data is None:
            return None
        return Message.model_validate(data)

    def list_thread(self, thread_id: str) -> list[Message]:
        """スレッド内のメッセージを作成日時の古い順で取得する。"""
        messages = []
        for path in list_files(self.messages_dir / thread_id, ".json"):
            message = self.get(path.stem, thread_id)
            if message:
                messages.append(message)
        return sorted(messages, key=lambda m: m.created_at)

    def delete(self, message_id: str, thread_id: str) -> bool:
        """メッセージを削除する。削除した場合 True。

        スレッドが空になった場合はスレッドのディレクトリも削除する。
        """
        deleted = remove_file(self._get_message_path(message_id, thread_id))
        thread_dir = self.messages_dir / thread_id
        if deleted and thread_dir.is_dir() and not any(thread_dir.iterdir()):
            thread_dir.rmdir()
        return deleted

    def list_threads(self) -> list[str]:
        """スレッドIDの一覧を取得する。"""
        return [d.name for d in list_subdirs(self.messages_dir)]

    def get_unread(self, agent_name: str) -> list[Message]:
        """エージェント宛の未読メッセージを全スレッドから古い順で取得する。"""
        unread = []
        for thread_id in self.list_threads():
            for message in self.list_thread(thread_id):
                if message.to_agent_id == agent_name and message.status != MessageStatus.READ:
                    unread.append(message)
        return sorted(unread, key=lambda m: m.created_at)

    def mark_read(self, message_id: str, thread_id: str) -> Message | None:
        """メッセージを既読にする。存在しない場合は何もしない。"""
        message = self.get(message_id, thread_id)
        if message is None:
            return None
        message.status = MessageStatus.READ
        message.read_at = utc_now()
        self.save(message)
        return message
