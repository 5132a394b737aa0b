from __future__ import annotations

import pytest

import main
from schemas import PoolSettings


def test_defaults_come_from_config():
    settings = main.load_settings([])

    assert settings == PoolSettings()
    assert settings.task_count == 20
    assert settings.worker_count == 4


def test_cli_run_writes_all_records(tmp_path, capsys):
    target = tmp_path / "out.txt"
    target.write_text("stale\n", encoding="utf-8")

    code = main.main(
        ["--tasks", "8", "--workers", "3", "--output", str(target), "--delay", "0", "--reset-output", "--quiet"]
    )

    assert code == 0
    lines = target.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 8
    assert "stale" not in lines
    out = capsys.readouterr().out
    assert "Elapsed:" in out
    assert "[WORKER" not in out


@pytest.mark.parametrize(
    "argv",
    [
        ["--workers", "0"],
        ["--tasks", "-1"],
        ["--timeout", "0"],
        ["--output", ""],
    ],
)
def test_invalid_configuration_exits_with_message(argv):
    with pytest.raises(SystemExit) as exc:
        main.load_settings(argv)

    assert "Invalid configuration" in str(exc.value)
