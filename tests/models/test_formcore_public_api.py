import json
import sys
from pathlib import Path

import pytest

import formcore
from formcore import evaluate
from formcore.cli import main as cli_main
from formcore.evaluator import FormEvaluator
from formcore.evaluator import evaluate as namespaced_evaluate

EXAMPLES = Path(__file__).resolve().parents[2] / "examples"
BLUEPRINT = str(EXAMPLES / "form1040_blueprint.json")
DATA = str(EXAMPLES / "taxpayer.json")


def test_formcore_namespace_exports_evaluate():
    assert namespaced_evaluate == evaluate
    assert evaluate == FormEvaluator.evaluate
    assert formcore.MISSING is formcore.resolve_path("$.absent", {})


def test_formcore_namespace_exports_are_declared():
    for name in formcore.__all__:
        assert hasattr(formcore, name)


def test_formcore_cli_help_runs(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["formcore"])
    assert cli_main() == 0
    assert "formcore CLI" in capsys.readouterr().out


def test_formcore_cli_version_runs(capsys):
    assert cli_main(["--version"]) == 0
    assert capsys.readouterr().out.strip()


def test_formcore_cli_evaluate_runs(capsys):
    assert cli_main(["evaluate", "--blueprint", BLUEPRINT, "--data", DATA]) == 0
    captured = capsys.readouterr()
    payload = json.loads(captured.out)
    assert payload["blueprintId"] == "form-1040-2025"
    assert payload["validation"]["isValid"] is True
    ssn = next(field for field in payload["fields"] if field["fieldId"] == "ssn")
    assert ssn["display"] == "123-45-6789"
    assert captured.err == ""


def test_formcore_cli_validate_exit_codes(tmp_path, capsys):
    assert cli_main(["validate", "--blueprint", BLUEPRINT, "--data", DATA]) == 0
    assert json.loads(capsys.readouterr().out)["isValid"] is True

    record = json.loads(Path(DATA).read_text(encoding="utf-8"))
    del record["taxpayer"]["ssn"]
    data = tmp_path / "incomplete.json"
    data.write_text(json.dumps(record), encoding="utf-8")
    assert cli_main(["validate", "--blueprint", BLUEPRINT, "--data", str(data)]) == 1
    payload = json.loads(capsys.readouterr().out)
    assert payload["isValid"] is False
    assert payload["errors"][0]["fieldId"] == "ssn"
    assert payload["errors"][0]["rule"] == "required"


def test_formcore_cli_summarize_runs(capsys):
    assert cli_main(["summarize", "--blueprint", BLUEPRINT]) == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["id"] == "form-1040-2025"
    assert summary["page_count"] == 2


def test_formcore_cli_verbose_emits_info_logs(capsys):
    assert cli_main(["-v", "validate", "--blueprint", BLUEPRINT, "--data", DATA]) == 0
    assert "INFO | formcore" in capsys.readouterr().err


def test_formcore_cli_log_level_debug_emits_debug_logs(capsys):
    assert cli_main(["--log-level", "DEBUG", "validate", "--blueprint", BLUEPRINT, "--data", DATA]) == 0
    assert "DEBUG | formcore" in capsys.readouterr().err


def test_formcore_cli_rejects_unreadable_inputs(tmp_path, capsys):
    with pytest.raises(SystemExit):
        cli_main(["evaluate", "--blueprint", str(tmp_path / "absent.json"), "--data", DATA])
    assert "Failed to read --blueprint" in capsys.readouterr().err

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(SystemExit):
        cli_main(["validate", "--blueprint", BLUEPRINT, "--data", str(broken)])
    assert "Failed to parse --data JSON" in capsys.readouterr().err


def test_formcore_cli_rejects_invalid_blueprint(tmp_path, capsys):
    blueprint = tmp_path / "bad.json"
    blueprint.write_text('{"id": "bad", "pages": [{"pageNumber": 1, "fields": [{"id": "f", "dataBinding": {"path": "f"}}]}]}', encoding="utf-8")
    with pytest.raises(SystemExit):
        cli_main(["summarize", "--blueprint", str(blueprint)])
    assert "Invalid blueprint" in capsys.readouterr().err
