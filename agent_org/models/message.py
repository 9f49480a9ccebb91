"""エージェント間メッセージモデル。"""

import uuid
from enum import Enum

from pydantic import Field

from agent_org.models.common import CamelModel, Timestamp, utc_now


class MessageType(str, Enum):
    """メッセージの種類。"""

    DIRECT = "direct"  # エージェント間の直接メッセージ
    SYSTEM = "system"  # システム通知
    CHAT = "chat"  # 人間とのチャット


class MessageStatus(str, Enum):
    """メッセージの配送状態。"""

    PENDING = "pending"
    DELIVERED = "delivered"
    READ = "read"


class Message(CamelModel):
    """エージェント間メッセージ。

    messages/<threadId>/<id>.json に保存される。既読化以外では変更しない。
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="メッセージID")
    thread_id: str = Field(..., description="スレッドID")
    from_agent_id: str | None = Field(default=None, description="送信元エージェント名")
    to_agent_id: str = Field(..., description="宛先エージェント名")
    subject: str | None = Field(default=None, description="件名")
    body: str = Field(..., description="本文")
    type: MessageType = Field(default=MessageType.DIRECT, description="メッセージ種類")
    status: MessageStatus = Field(default=MessageStatus.PENDING, description="配送状態")
    created_at: Timestamp = Field(default_factory=utc_now, description="作成日時")
    read_at: Timestamp | None = Field(default=None, description="既読日時")

    @property
    def is_read(self) -> bool:
        """既読かどうか。"""
        return self.status == MessageStatus.READ
