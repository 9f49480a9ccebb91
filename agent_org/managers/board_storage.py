"""共有ボードの永続化モジュール。

保存先: {workspace}/board/{type-folder}/{id}.md
形式: Front Matter（key: value 行）+ Markdown 本文

Front Matter は行ごとに最初のコロンで key と value に分ける。
summary にコロンが含まれていてもそのまま復元できる。
"""

import logging
import re
from datetime import datetime
from pathlib import Path

from pydantic import ValidationError

from agent_org.managers.persistence import atomic_write_text, list_files, read_text, remove_file
from agent_org.models.board import BoardItem, BoardItemType
from agent_org.models.common import format_timestamp

logger = logging.getLogger(__name__)

_DOCUMENT_PATTERN = re.compile(r"\A---\n(.*?)\n---\n\n?(.*)\Z", re.DOTALL)


def _single_line(value: str) -> str:
    """Front Matter の値を 1 行に収める。"""
    return " ".join(value.splitlines())


def build_board_document(item: BoardItem) -> str:
    """ボード投稿の Markdown を組み立てる。"""
    front_matter = "\n".join(
        [
            "---",
            f"id: {item.id}",
            f"type: {item.type.value}",
            f"author: {_single_line(item.author)}",
            f"summary: {_single_line(item.summary)}",
            f"createdAt: {format_timestamp(item.created_at)}",
            "---",
        ]
    )
    return f"{front_matter}\n\n{item.body}\n"


def parse_board_document(content: str, path: Path | None = None) -> BoardItem | None:
    """Markdown からボード投稿を復元する。形式が不正な場合は None。"""
    match = _DOCUMENT_PATTERN.match(content)
    if not match:
        return None

    fields: dict[str, str] = {}
    for line in match.group(1).split("\n"):
        key, sep, value = line.partition(":")
        if not sep:
            continue
        fields[key.strip()] = value.strip()

    try:
        return BoardItem(
            id=fields["id"],
            type=BoardItemType(fields["type"]),
            author=fields.get("author", ""),
            summary=fields.get("summary", ""),
            body=match.group(2).rstrip(),
            created_at=datetime.fromisoformat(fields["createdAt"].replace("Z", "+00:00")),
            path=path,
        )
    except (KeyError, ValueError, ValidationError) as e:
        logger.warning(f"ボード投稿の読み込みに失敗 ({path}): {e}")
        return None


class BoardStorage:
    """種類別フォルダにボード投稿を保存するクラス。"""

    def __init__(self, base_path: str | Path) -> None:
        """BoardStorageを初期化する。

        Args:
            base_path: ワークスペースのルート
        """
        self.board_dir = Path(base_path) / "board"

    def get_item_path(self, item_type: BoardItemType | str, item_id: str) -> Path:
        """投稿のファイルパスを取得する。"""
        return self.board_dir / BoardItemType(item_type).folder / f"{item_id}.md"

    def save(self, item: BoardItem) -> Path:
        """投稿を保存し、保存先パスを返す。"""
        path = self.get_item_path(item.type, item.id)
        atomic_write_text(path, build_board_document(item))
        return path

    def get(self, item_type: BoardItemType | str, item_id: str) -> BoardItem | None:
        """投稿を取得する。存在しない場合や形式が不正な場合は None。"""
        try:
            item_type = BoardItemType(item_type)
        except ValueError:
            return None
        path = self.get_item_path(item_type, item_id)
        content = read_text(path)
        if content is None:
            return None
        return parse_board_document(content, path)

    def delete(self, item_type: BoardItemType | str, item_id: str) -> bool:
        """投稿を削除する。削除した場合 True。不明な種類は False。"""
        try:
            item_type = BoardItemType(item_type)
        except ValueError:
            return False
        return remove_file(self.get_item_path(item_type, item_id))

    def list(
        self,
        item_type: BoardItemType | str | None = None,
        author: str | None = None,
        limit: int | None = None,
    ) -> list[BoardItem]:
        """投稿一覧を作成日時の新しい順で取得する。

        Args:
            item_type: 種類で絞り込む
            author: 投稿者で絞り込む
            limit: 並べ替え後に先頭から返す件数

        Returns:
            ボード投稿のリスト
        """
        types = [BoardItemType(item_type)] if item_type else list(BoardItemType)
        items = []
        for board_type in types:
            for path in list_files(self.board_dir / board_type.folder, ".md"):
                item = self.get(board_type, path.stem)
                if item is None:
                    continue
                if author is not None and item.author != author:
                    continue
                items.append(item)

        items.sort(key=lambda i: i.created_at, reverse=True)
        if limit:
            return items[:limit]
        return items
