"""共有ボードのモデル定義。"""

import uuid
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from agent_org.models.common import Timestamp, utc_now


class BoardItemType(str, Enum):
    """ボード投稿の種類。種類ごとに保存フォルダが分かれる。"""

    STATUS_UPDATE = "status_update"
    BLOCKER = "blocker"
    FINDING = "finding"
    REQUEST = "request"

    @property
    def folder(self) -> str:
        """board/ 配下の保存フォルダ名。"""
        return BOARD_TYPE_TO_FOLDER[self]


BOARD_TYPE_TO_FOLDER = {
    BoardItemType.STATUS_UPDATE: "status-updates",
    BoardItemType.BLOCKER: "blockers",
    BoardItemType.FINDING: "findings",
    BoardItemType.REQUEST: "requests",
}


class BoardItem(BaseModel):
    """ボード投稿。追記のみで更新しない。

    path は読み込み元のファイルで、ファイル内には書き込まない。
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="投稿ID")
    type: BoardItemType = Field(..., description="投稿種類")
    author: str = Field(..., description="投稿者")
    summary: str = Field(..., description="要約")
    body: str = Field(default="", description="本文")
    created_at: Timestamp = Field(default_factory=utc_now, description="作成日時")
    path: Path | None = Field(default=None, exclude=True, description="読み込み元ファイル")
