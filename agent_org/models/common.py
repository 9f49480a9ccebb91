"""モデル共通の型とヘルパー。"""

from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    """ミリ秒精度に丸めた現在の UTC 時刻を返す。"""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def format_timestamp(value: datetime) -> str:
    """日時を YYYY-MM-DDTHH:MM:SS.mmmZ 形式の文字列にする。"""
    return _ensure_utc(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _ensure_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


Timestamp = Annotated[
    datetime,
    AfterValidator(_ensure_utc),
    PlainSerializer(format_timestamp, return_type=str, when_used="json"),
]
"""UTC に正規化され、JSON では Z 付き ISO 文字列になる日時。"""


class CamelModel(BaseModel):
    """ディスク上では camelCase のフィールド名を使うモデルの基底クラス。"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_record(self) -> dict:
        """ディスク保存用の dict を返す。"""
        return self.model_dump(mode="json", by_alias=True)
