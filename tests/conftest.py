from __future__ import annotations

import json
import os
import subprocess
import sys
import textwrap
from pathlib import Path
from typing import Callable

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]


def write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def run_cli(root: Path, *args: str, stdin: str | None = None) -> subprocess.CompletedProcess:
    """Запускает urit.cli в отдельном процессе с рабочим каталогом root."""
    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(REPO_ROOT), env.get("PYTHONPATH")]))
    env.pop("URIT_CONFIG", None)
    return subprocess.run(
        [sys.executable, "-m", "urit.cli", *args],
        cwd=root, env=env, capture_output=True, text=True, encoding="utf-8", input=stdin,
    )


def jload(s: str):
    return json.loads(s)


@pytest.fixture
def cli() -> Callable[..., subprocess.CompletedProcess]:
    return run_cli


@pytest.fixture
def rfc_values() -> dict:
    """Набор переменных из примеров RFC 6570."""
    return {
        "count": ["one", "two", "three"],
        "dom": ["example", "com"],
        "dub": "me/too",
        "hello": "Hello World!",
        "half": "50%",
        "var": "value",
        "who": "fred",
        "base": "http://example.com/home/",
        "path": "/foo/bar",
        "list": ["red", "green", "blue"],
        "keys": {"semi": ";", "dot": ".", "comma": ","},
        "v": "6",
        "x": "1024",
        "y": "768",
        "empty": "",
        "empty_keys": [],
        "undef": None,
    }


@pytest.fixture
def catalog_project(tmp_path: Path) -> Path:
    """Каталог с uri-templates.yaml: два шаблона и переменная по умолчанию."""
    write(
        tmp_path / "uri-templates.yaml",
        textwrap.dedent("""
        templates:
          search: "http://example.com/search{?q,lang}"
          user: "/users/{id}{?fields*}"
        variables:
          lang: en
        """).strip() + "\n",
    )
    return tmp_path
