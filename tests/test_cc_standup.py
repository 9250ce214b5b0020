import pytest

from cc_standup import __version__, main

SCENARIO_LOG = """\
### 2026-02-27 09:00-10:30 JST
- いつ: 2026-02-27 09:00-10:30 JST（90分）
- どこで: alpha
- 誰が: CC: 7件
- 何を: 3ファイル変更 (+120/-5)

### 2026-02-27 11:00-13:00 JST
- いつ: 2026-02-27 11:00-13:00 JST（120分）
- どこで: beta
- 何を: 1ファイル変更 (+15000/-0)
"""


@pytest.fixture
def log_dir(tmp_path):
    d = tmp_path / "proof-log"
    d.mkdir()
    (d / "2026-02-27.md").write_text(SCENARIO_LOG, encoding="utf-8")
    return d


def test_plain_report_to_stdout(log_dir, capsys):
    assert main(["--date", "2026-02-27", "--dir", str(log_dir)]) == 0

    out = capsys.readouterr().out
    assert out.startswith("📋 AI Standup — 2026-02-27 (Fri)\n")
    assert out.index("• beta") < out.index("• alpha")
    assert out.endswith("Generated by cc-standup\n")


def test_format_flag(log_dir, capsys):
    main(["--date", "2026-02-27", "--dir", str(log_dir), "--format", "tweet"])

    out = capsys.readouterr().out
    assert out.startswith("AI Standup 02-27 🤖\n✅ beta: 2h 0m (+15.0K lines)\n")


def test_unknown_format_uses_plain(log_dir, capsys):
    main(["--date", "2026-02-27", "--dir", str(log_dir), "--format", "html"])

    assert capsys.readouterr().out.startswith("📋 AI Standup")


@pytest.mark.parametrize(
    "fmt, marker",
    [
        ("plain", "👻 Ghost Day — AI worked autonomously. No sessions logged."),
        ("slack", "👻 *Ghost Day* — AI worked autonomously. No sessions logged."),
        ("tweet", "Ghost Day — AI ran autonomously"),
    ],
)
def test_missing_log_is_ghost_day(tmp_path, capsys, fmt, marker):
    assert main(["--date", "2026-01-01", "--dir", str(tmp_path), "--format", fmt]) == 0

    assert marker in capsys.readouterr().out


def test_settings_supply_dir_and_format(log_dir, monkeypatch, capsys):
    monkeypatch.setenv("PROOF_LOG_DIR", str(log_dir))
    monkeypatch.setenv("STANDUP_FORMAT", "slack")

    main(["--date", "2026-02-27"])

    assert capsys.readouterr().out.startswith("*AI Standup — 2026-02-27 (Fri)*")


def test_flags_override_settings(log_dir, tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("PROOF_LOG_DIR", str(tmp_path / "elsewhere"))
    monkeypatch.setenv("STANDUP_FORMAT", "slack")

    main(["--date", "2026-02-27", "--dir", str(log_dir), "--format", "plain"])

    out = capsys.readouterr().out
    assert out.startswith("📋 AI Standup")
    assert "Ghost Day" not in out


def test_invalid_configuration_exits_2(monkeypatch, capsys):
    monkeypatch.setenv("LOG_LEVEL", "chatty")

    assert main(["--date", "2026-02-27"]) == 2

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("Error: Invalid configuration (log_level)")


def test_diagnostics_go_to_stderr_only(log_dir, monkeypatch, capsys):
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    main(["--date", "2026-02-27", "--dir", str(log_dir)])

    captured = capsys.readouterr()
    assert '"event": "report.built"' in captured.err
    assert "report.built" not in captured.out


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])

    assert excinfo.value.code == 0
    assert capsys.readouterr().out.strip() == __version__
