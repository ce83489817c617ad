"""
Загрузчик каталога шаблонов.

Каталог — YAML-файл с именованными шаблонами и значениями переменных
по умолчанию:

    templates:
      search: "http://example.com/search{?q,lang}"
    variables:
      lang: en

Все шаблоны разбираются при загрузке, поэтому синтаксическая ошибка
обнаруживается сразу и сообщается с именем шаблона.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import UritUserError
from .template import ParseError, Template

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_NAME = "uri-templates.yaml"
CATALOG_ENV = "URIT_CONFIG"

_KNOWN_KEYS = {"templates", "variables"}

_yaml = YAML(typ="safe")


class CatalogError(UritUserError):
    """Ошибка загрузки или использования каталога шаблонов."""
    pass


@dataclass
class TemplateCatalog:
    """
    Набор именованных шаблонов с переменными по умолчанию.
    """
    templates: Dict[str, Template] = field(default_factory=dict)
    variables: Dict[str, Any] = field(default_factory=dict)
    path: Optional[Path] = None

    def names(self) -> List[str]:
        return sorted(self.templates)

    def get(self, name: str) -> Template:
        """
        Возвращает шаблон по имени.

        Raises:
            CatalogError: Если шаблон не найден
        """
        try:
            return self.templates[name]
        except KeyError:
            raise CatalogError(f"Unknown template '{name}'") from None

    def expand(self, name: str, values: Optional[Mapping[str, Any]] = None) -> str:
        """
        Раскрывает именованный шаблон.

        Значения из values имеют приоритет над переменными каталога;
        явное None в values отменяет значение по умолчанию.
        """
        template = self.get(name)
        merged = {**self.variables, **(values or {})}
        return template.expand(merged)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any], path: Optional[Path] = None) -> "TemplateCatalog":
        """
        Строит каталог из разобранного YAML-документа.

        Raises:
            CatalogError: При нарушении структуры или ошибке разбора шаблона
        """
        where = str(path) if path else "<catalog>"

        unknown = set(raw) - _KNOWN_KEYS
        if unknown:
            logger.warning("Ignoring unknown keys in %s: %s", where, ", ".join(sorted(map(str, unknown))))

        raw_templates = raw.get("templates")
        if raw_templates is None:
            raw_templates = {}
        if not isinstance(raw_templates, Mapping):
            raise CatalogError(f"{where}: 'templates' must be a mapping")

        raw_variables = raw.get("variables")
        if raw_variables is None:
            raw_variables = {}
        if not isinstance(raw_variables, Mapping):
            raise CatalogError(f"{where}: 'variables' must be a mapping")

        templates: Dict[str, Template] = {}
        for name, source in raw_templates.items():
            if not isinstance(source, str):
                raise CatalogError(f"{where}: template '{name}' must be a string")
            try:
                templates[str(name)] = Template(source)
            except ParseError as e:
                raise CatalogError(f"{where}: template '{name}': {e}") from e

        return cls(
            templates=templates,
            variables={str(k): v for k, v in raw_variables.items()},
            path=path,
        )


def default_catalog_path(cwd: Optional[Path] = None) -> Path:
    """Путь каталога по умолчанию: $URIT_CONFIG или ./uri-templates.yaml."""
    env = os.environ.get(CATALOG_ENV)
    if env:
        return Path(env)
    return (cwd or Path.cwd()) / DEFAULT_CATALOG_NAME


def load_catalog(path: Path) -> TemplateCatalog:
    """
    Загружает каталог шаблонов из YAML-файла.

    Args:
        path: Путь к файлу каталога

    Returns:
        Каталог с разобранными шаблонами

    Raises:
        CatalogError: Если файл отсутствует, не является YAML-мапой
                      или содержит некорректный шаблон
    """
    if not path.is_file():
        raise CatalogError(f"Template catalog not found: {path}")

    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise CatalogError(f"Failed to parse YAML in {path}: {e}") from e

    if not isinstance(raw, dict):
        raise CatalogError(f"YAML must be a mapping: {path}")

    catalog = TemplateCatalog.from_dict(raw, path)
    logger.debug("Loaded %d template(s) from %s", len(catalog.templates), path)
    return catalog


__all__ = ["CatalogError", "TemplateCatalog", "load_catalog", "default_catalog_path", "DEFAULT_CATALOG_NAME"]
