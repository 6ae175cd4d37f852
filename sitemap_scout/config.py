# === FILE: sitemap_scout/config.py ===
"""
Модуль для загрузки и валидации конфигурации краулера SitemapScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

DEFAULT_USER_AGENTS: List[str] = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/61.0.3163.100 Safari/537.36",
    "Mozilla/5.0 (Windows NT 6.1; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/61.0.3163.100 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_12_6) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/61.0.3163.100 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_12_6) AppleWebKit/604.1.38 "
    "(KHTML, like Gecko) Version/11.0 Safari/604.1.38",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:56.0) Gecko/20100101 Firefox/56.0",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_13) AppleWebKit/604.1.38 "
    "(KHTML, like Gecko) Version/11.0 Safari/604.1.38",
]


class CrawlerConfig(BaseModel):
    """Конфигурация для одного запуска обхода sitemap."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    seed_url: HttpUrl = Field(..., description="URL корневого sitemap.")
    max_depth: int = Field(10, ge=0, description="Максимальная глубина вложенности sitemap-индексов.")
    walk_timeout: float = Field(600.0, gt=0, description="Бюджет времени на обход sitemap (секунд).")
    concurrency: int = Field(10, ge=1, description="Число одновременных загрузок страниц.")
    timeout: float = Field(30.0, gt=0, description="Таймаут на один запрос (секунд).")
    rate_interval: float = Field(0.1, gt=0, description="Интервал между запросами (секунд).")
    user_agents: List[str] = Field(
        default_factory=lambda: list(DEFAULT_USER_AGENTS),
        min_length=1,
        description="Пул заголовков User-Agent, выбирается случайно на каждый запрос.",
    )
    extract_metadata: bool = Field(False, description="Извлекать title, h1 и meta description.")

    connectivity_host: str = Field("google.com", min_length=1, description="Хост для проверки сети.")
    connectivity_port: int = Field(80, ge=1, le=65535)
    connectivity_timeout: float = Field(5.0, gt=0)

    @field_validator("seed_url", mode="before")
    def _strip_whitespace(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("user_agents")
    def _no_blank_agents(cls, v: List[str]) -> List[str]:
        if any(not ua.strip() for ua in v):
            raise ValueError("user_agents must not contain blank strings")
        return v


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


def read_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Читает YAML или JSON файл конфигурации и возвращает сырой словарь."""
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")


def load_config(
    path: Union[str, Path, None] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> CrawlerConfig:
    """
    Читает YAML или JSON, накладывает overrides и возвращает проверенный CrawlerConfig.

    Если path не задан, используется configs/default.yaml (когда он существует).
    Значения None в overrides игнорируются, чтобы незаданные опции CLI
    не затирали значения из файла.
    """
    data: Dict[str, Any] = {}
    if path is not None:
        data = read_config_file(path)
    elif _DEFAULT_CFG.is_file():
        data = read_config_file(_DEFAULT_CFG)

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})

    return CrawlerConfig(**data)


__all__ = ["CrawlerConfig", "DEFAULT_USER_AGENTS", "load_config", "read_config_file"]
