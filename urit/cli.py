from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import TemplateCatalog, default_catalog_path, load_catalog
from .errors import UritUserError
from .template import ExpressionElement, Template, TextElement
from .version import tool_version

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="urit",
        description="URI Template (RFC 6570) expander",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument("--verbose", action="store_true", help="подробный лог (DEBUG)")
    p.add_argument(
        "--config",
        metavar="PATH",
        help="каталог шаблонов (по умолчанию $URIT_CONFIG или ./uri-templates.yaml)",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_template(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "template",
            help="текст шаблона или @name для шаблона из каталога",
        )

    sp_expand = sub.add_parser("expand", help="Раскрыть шаблон")
    add_template(sp_expand)
    sp_expand.add_argument(
        "-D", "--define",
        action="append",
        metavar="NAME=VALUE",
        help="скалярное значение переменной (можно указать несколько)",
    )
    sp_expand.add_argument(
        "-L", "--list",
        action="append",
        dest="lists",
        metavar="NAME=A,B,C",
        help="значение-список, элементы через запятую",
    )
    sp_expand.add_argument(
        "-M", "--map",
        action="append",
        dest="maps",
        metavar="NAME=K1=V1,K2=V2",
        help="ассоциативное значение, пары через запятую",
    )
    sp_expand.add_argument(
        "--json",
        metavar="FILE|-",
        help="JSON-объект со значениями переменных: путь к файлу или - для stdin",
    )

    sp_parse = sub.add_parser("parse", help="Структура разобранного шаблона (JSON)")
    add_template(sp_parse)

    sp_vars = sub.add_parser("variables", help="Имена переменных шаблона (JSON)")
    add_template(sp_vars)

    sub.add_parser("list", help="Имена шаблонов каталога (JSON)")

    return p


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose or os.environ.get("URIT_DEBUG") else logging.INFO
    root = logging.getLogger()
    root.setLevel(level)
    if not root.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        root.addHandler(h)


def _catalog_path(ns: argparse.Namespace) -> Path:
    if ns.config:
        return Path(ns.config)
    return default_catalog_path()


def _load_catalog(ns: argparse.Namespace) -> TemplateCatalog:
    return load_catalog(_catalog_path(ns))


def _resolve_template(ns: argparse.Namespace) -> Template:
    """Шаблон по аргументу: '@name' берётся из каталога, иначе аргумент разбирается как текст."""
    text: str = ns.template
    if text.startswith("@"):
        return _load_catalog(ns).get(text[1:])
    return Template(text)


def _expand(ns: argparse.Namespace) -> str:
    """
    Раскрывает шаблон со значениями из аргументов.

    Шаблон '@name' раскрывается через TemplateCatalog.expand
    (значения каталога по умолчанию, явное null их отменяет).
    """
    values = _parse_values(ns)
    text: str = ns.template
    logger.debug("Expanding %r with variables %s", text, sorted(values))
    if text.startswith("@"):
        return _load_catalog(ns).expand(text[1:], values)
    return Template(text).expand(values)


def _split_assignment(spec: str) -> tuple[str, str]:
    if "=" not in spec:
        raise ValueError(f"Invalid variable format '{spec}'. Expected 'NAME=VALUE'")
    name, value = spec.split("=", 1)
    name = name.strip()
    if not name:
        raise ValueError(f"Invalid variable format '{spec}'. Empty name")
    return name, value


def _parse_values(ns: argparse.Namespace) -> Dict[str, Any]:
    """Собирает значения переменных из --json, -D, -L и -M (в этом порядке приоритета по возрастанию)."""
    values: Dict[str, Any] = {}

    if ns.json:
        values.update(_read_json_values(ns.json))

    for spec in ns.define or []:
        name, value = _split_assignment(spec)
        values[name] = value

    for spec in ns.lists or []:
        name, value = _split_assignment(spec)
        values[name] = value.split(",") if value else []

    for spec in ns.maps or []:
        name, value = _split_assignment(spec)
        pairs: Dict[str, str] = {}
        for item in filter(None, value.split(",")):
            key, item_value = _split_assignment(item)
            pairs[key] = item_value
        values[name] = pairs

    return values


def _read_json_values(arg: str) -> Dict[str, Any]:
    if arg == "-":
        content = sys.stdin.read()
    else:
        file_path = Path(arg)
        if not file_path.exists():
            raise ValueError(f"JSON file not found: {file_path}")
        content = file_path.read_text(encoding="utf-8")
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON values: {e}") from e
    if not isinstance(data, dict):
        raise ValueError("JSON values must be an object")
    return data


def _describe(template: Template) -> Dict[str, Any]:
    elements: List[Dict[str, Any]] = []
    for element in template.elements:
        if isinstance(element, TextElement):
            elements.append({"type": "text", "text": element.text})
        elif isinstance(element, ExpressionElement):
            elements.append({
                "type": "expression",
                "text": element.text,
                "operator": str(element.operator),
                "variables": [
                    {"name": ref.name, "characterLimit": ref.character_limit, "explode": ref.explode}
                    for ref in element.variables
                ],
            })
    return {"source": template.source, "elements": elements}


def _jdumps(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2) + "\n"


def main(argv: Optional[list[str]] = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns.verbose)

    try:
        if ns.cmd == "expand":
            sys.stdout.write(_expand(ns) + "\n")
            return 0

        if ns.cmd == "parse":
            template = _resolve_template(ns)
            sys.stdout.write(_jdumps(_describe(template)))
            return 0

        if ns.cmd == "variables":
            template = _resolve_template(ns)
            sys.stdout.write(_jdumps({"variables": template.variables}))
            return 0

        if ns.cmd == "list":
            catalog = _load_catalog(ns)
            sys.stdout.write(_jdumps({"templates": catalog.names()}))
            return 0

    except UritUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
