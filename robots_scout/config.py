# === FILE: robots_scout/config.py ===
"""
Модуль для загрузки и валидации конфигурации RobotsScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_FILE_SIZE = 500 * 1024 * 1024
MAX_HTML_SIZE = 5 * 1024 * 1024
MAX_REDIRECTS = 5
CHUNK_SIZE = 8 * 1024


class RobotsConfig(BaseModel):
    """Настройки загрузки и разбора robots.txt."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    bot_name: str = Field("RobotsScout", description="Имя бота в подписи User-Agent.")
    bot_version: str = Field("1.0", description="Версия бота в подписи User-Agent.")
    bot_url: str = Field(
        "https://github.com/robots-scout/robots-scout",
        description="URL с описанием бота.",
    )
    user_agent: Optional[str] = Field(
        None, description="Готовая строка User-Agent; заменяет подпись из bot_*."
    )
    timeout: float = Field(30.0, gt=0, description="Общий таймаут HTTP-сессии (секунд).")
    page_timeout: float = Field(10.0, gt=0, description="Таймаут запроса страницы (секунд).")
    robots_timeout: float = Field(10.0, gt=0, description="Таймаут запроса robots.txt (секунд).")
    max_redirects: int = Field(MAX_REDIRECTS, ge=1, description="Максимум редиректов.")
    max_file_size: int = Field(MAX_FILE_SIZE, ge=1, description="Лимит размера robots.txt (байт).")
    max_html_size: int = Field(MAX_HTML_SIZE, ge=1, description="Сколько HTML читать ради meta-тегов.")
    chunk_size: int = Field(CHUNK_SIZE, ge=1, description="Размер блока при потоковом чтении.")

    @field_validator("user_agent", mode="before")
    def _blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def signature(self) -> str:
        """Mozilla/5.0 (compatible; Bot/Version; Url)"""
        if self.user_agent:
            return self.user_agent
        if not self.bot_name or not self.bot_version:
            return ""
        return f"Mozilla/5.0 (compatible; {self.bot_name}/{self.bot_version}; {self.bot_url})"


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None] = None) -> RobotsConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект RobotsConfig.
    Без пути использует configs/default.yaml, если он есть, иначе значения по умолчанию.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return RobotsConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return RobotsConfig(**data)


__all__ = [
    "RobotsConfig",
    "load_config",
    "MAX_FILE_SIZE",
    "MAX_HTML_SIZE",
    "MAX_REDIRECTS",
    "CHUNK_SIZE",
]
