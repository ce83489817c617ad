from __future__ import annotations

from pathlib import Path

from tests.conftest import jload, run_cli, write


def test_expand_inline_template(tmp_path: Path):
    cp = run_cli(tmp_path, "expand", "http://example.com/~{user}/", "-D", "user=fred")
    assert cp.returncode == 0, cp.stderr
    assert cp.stdout == "http://example.com/~fred/\n"


def test_expand_lists_and_maps(tmp_path: Path):
    cp = run_cli(
        tmp_path, "expand", "/find{?year*}{&address*}",
        "-L", "year=1965,2000",
        "-M", "address=city=Newport Beach,state=CA",
    )
    assert cp.returncode == 0, cp.stderr
    assert cp.stdout.strip() == "/find?year=1965&year=2000&city=Newport%20Beach&state=CA"


def test_expand_json_values_from_stdin(tmp_path: Path):
    cp = run_cli(
        tmp_path, "expand", "{/list*}{?keys*}", "--json", "-",
        stdin='{"list": ["red", "green"], "keys": {"semi": ";"}}',
    )
    assert cp.returncode == 0, cp.stderr
    assert cp.stdout.strip() == "/red/green?semi=%3B"


def test_expand_json_file_overridden_by_define(tmp_path: Path):
    values = write(tmp_path / "values.json", '{"x": "1", "y": "2"}')
    cp = run_cli(tmp_path, "expand", "{x,y}", "--json", str(values), "-D", "y=3")
    assert cp.returncode == 0, cp.stderr
    assert cp.stdout.strip() == "1,3"


def test_expand_catalog_template(catalog_project: Path):
    cp = run_cli(catalog_project, "expand", "@search", "-D", "q=chien")
    assert cp.returncode == 0, cp.stderr
    assert cp.stdout.strip() == "http://example.com/search?q=chien&lang=en"

    cp = run_cli(catalog_project, "expand", "@search", "-D", "q=chien", "-D", "lang=fr")
    assert cp.stdout.strip() == "http://example.com/search?q=chien&lang=fr"


def test_expand_with_explicit_config(catalog_project: Path):
    elsewhere = catalog_project / "elsewhere"
    elsewhere.mkdir()
    cp = run_cli(
        elsewhere, "--config", str(catalog_project / "uri-templates.yaml"),
        "expand", "@user", "-D", "id=42",
    )
    assert cp.returncode == 0, cp.stderr
    assert cp.stdout.strip() == "/users/42"


def test_list_templates(catalog_project: Path):
    cp = run_cli(catalog_project, "list")
    assert cp.returncode == 0, cp.stderr
    assert jload(cp.stdout) == {"templates": ["search", "user"]}


def test_variables(tmp_path: Path):
    cp = run_cli(tmp_path, "variables", "/{a}/{b,a}{?c*}")
    assert cp.returncode == 0, cp.stderr
    assert jload(cp.stdout) == {"variables": ["a", "b", "c"]}


def test_parse_structure(tmp_path: Path):
    cp = run_cli(tmp_path, "parse", "/x{;a:3,b*}")
    assert cp.returncode == 0, cp.stderr
    data = jload(cp.stdout)
    assert data["source"] == "/x{;a:3,b*}"
    text, expression = data["elements"]
    assert text == {"type": "text", "text": "/x"}
    assert expression["type"] == "expression"
    assert expression["operator"] == ";"
    assert expression["variables"] == [
        {"name": "a", "characterLimit": 3, "explode": False},
        {"name": "b", "characterLimit": None, "explode": True},
    ]


def test_parse_error_exit_code(tmp_path: Path):
    cp = run_cli(tmp_path, "parse", "(prefix){var-1}")
    assert cp.returncode == 2
    assert "Illegal character in variable at offset 12" in cp.stderr


def test_unknown_catalog_template(catalog_project: Path):
    cp = run_cli(catalog_project, "expand", "@nope")
    assert cp.returncode == 2
    assert "Unknown template 'nope'" in cp.stderr


def test_missing_catalog(tmp_path: Path):
    cp = run_cli(tmp_path, "list")
    assert cp.returncode == 2
    assert "Template catalog not found" in cp.stderr


def test_bad_define(tmp_path: Path):
    cp = run_cli(tmp_path, "expand", "{x}", "-D", "novalue")
    assert cp.returncode == 2
    assert "Expected 'NAME=VALUE'" in cp.stderr


def test_verbose_logs_to_stderr(tmp_path: Path):
    cp = run_cli(tmp_path, "--verbose", "expand", "{x}", "-D", "x=1")
    assert cp.returncode == 0, cp.stderr
    assert cp.stdout.strip() == "1"
    assert "[DEBUG]" in cp.stderr


def test_json_null_clears_catalog_default(catalog_project: Path):
    cp = run_cli(
        catalog_project, "expand", "@search", "--json", "-",
        stdin='{"q": "chien", "lang": null}',
    )
    assert cp.returncode == 0, cp.stderr
    assert cp.stdout.strip() == "http://example.com/search?q=chien"


def test_variables_of_catalog_template(catalog_project: Path):
    cp = run_cli(catalog_project, "variables", "@user")
    assert cp.returncode == 0, cp.stderr
    assert jload(cp.stdout) == {"variables": ["id", "fields"]}
