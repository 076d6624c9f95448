from __future__ import annotations

import json

from app_cli.grade import main


def _write(path, payload) -> str:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def test_grade_prints_result_and_exit_code(tmp_path, capsys):
    items = _write(tmp_path / "items.json", [
        {"id": "q1", "type": "open", "triggerWords": ["refund"]},
        {"id": "q2", "type": "points", "maxPoints": 4},
    ])
    responses = _write(tmp_path / "responses.json", {"q1": "Refund sent", "q2": 1})

    assert main(["--items", items, "--responses", responses, "--passing-score", "60"]) == 0
    body = json.loads(capsys.readouterr().out)
    assert body["percentage"] == 63
    assert body["items"][0]["matchedTriggers"] == ["refund"]

    out = tmp_path / "result.json"
    code = main(["--items", items, "--responses", responses, "--passing-score", "70", "--out", str(out)])
    assert code == 2
    assert "FAILED  63%" in capsys.readouterr().out
    assert json.loads(out.read_text(encoding="utf-8"))["passed"] is False


def test_grade_reports_scoring_errors(tmp_path, capsys):
    items = _write(tmp_path / "items.json", [{"id": "c", "type": "checkbox"}])
    responses = _write(tmp_path / "responses.json", {"c": "maybe"})
    assert main(["--items", items, "--responses", responses, "--passing-score", "50"]) == 1
    assert "[c]" in capsys.readouterr().err
