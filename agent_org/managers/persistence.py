"""ファイル永続化の共通処理。

レコードは tmpfile + os.replace でアトミックに書き込む。
途中でプロセスが落ちても、読み手には旧内容か新内容のどちらかだけが見える。
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

TEMP_SUFFIX = ".tmp"


def atomic_write_text(file_path: Path, content: str) -> None:
    """アトミック書き込み（tmpfile + os.replace）でファイルを安全に保存する。

    Args:
        file_path: 保存先ファイルのパス
        content: 書き込む内容
    """
    file_path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=str(file_path.parent), suffix=TEMP_SUFFIX)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_path, str(file_path))
    except BaseException:
        # 書き込み失敗時に一時ファイルを削除
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


def atomic_write_json(file_path: Path, payload: Any) -> None:
    """JSON を 2 スペースインデントでアトミックに保存する。"""
    atomic_write_text(
        file_path,
        json.dumps(payload, ensure_ascii=False, indent=2, default=str) + "\n",
    )


def read_json(file_path: Path) -> Any | None:
    """JSON ファイルを読み込む。

    ファイルが存在しない場合は None を返す。
    権限エラーや壊れた JSON などはそのまま送出する。
    """
    try:
        text = file_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    return json.loads(text)


def read_text(file_path: Path) -> str | None:
    """テキストファイルを読み込む。存在しない場合は None を返す。"""
    try:
        return file_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None


def list_files(directory: Path, suffix: str) -> list[Path]:
    """ディレクトリ直下の指定拡張子ファイルを名前順で返す。

    ディレクトリが存在しない場合は空リスト。一時ファイルは含めない。
    """
    if not directory.is_dir():
        return []
    return sorted(
        p
        for p in directory.iterdir()
        if p.is_file() and p.suffix == suffix and not p.name.endswith(TEMP_SUFFIX)
    )


def list_subdirs(directory: Path) -> list[Path]:
    """ディレクトリ直下のサブディレクトリを名前順で返す。"""
    if not directory.is_dir():
        return []
    return sorted(p for p in directory.iterdir() if p.is_dir())


def remove_file(file_path: Path) -> bool:
    """ファイルを削除する。存在しなかった場合は False を返す。"""
    try:
        file_path.unlink()
    except FileNotFoundError:
        return False
    return True
