# tests/test_cli.py - CLI session checks with injected streams
import io
import sys

import pytest
from rich.console import Console

from bracket_index.cli import CLI, build_parser, main, read_tokens
from bracket_index.utils.config_manager import Config
from bracket_index.utils.logger_utils import Log


def _console(buf):
    return Console(file=buf, highlight=False, soft_wrap=True, color_system=None, width=200)


@pytest.fixture
def session(tmp_path):
    def _run(stdin_text, filename=None, **cfg_overrides):
        cfg = Config(str(tmp_path / "missing.json"))
        cfg.data.update(cfg_overrides)
        out, err = io.StringIO(), io.StringIO()
        cli = CLI(cfg, stdin=io.StringIO(stdin_text), console=_console(out),
                  err_console=_console(err), log=Log(path=None))
        code = cli.run(filename)
        return code, out.getvalue(), err.getvalue(), cli
    return _run


def test_scenario_with_filename_argument(session, sample_file):
    code, out, err, _ = session("ca cat\ndog 0 car\n", str(sample_file))
    assert code == 0
    assert out.splitlines() == [
        "ca is prefix of 2 words",
        "cat is prefix of 1 words",
        "cat is at (0,8)",
        "dog is not prefix",
    ]
    assert err == ""


def test_filename_read_from_stdin(session, sample_file):
    code, out, _, _ = session(f"{sample_file}\ncar\n0\n")
    assert code == 0
    assert out.splitlines() == ["car is prefix of 1 words", "car is at (9,7)"]


def test_eof_without_sentinel_ends_session(session, sample_file):
    code, out, _, _ = session("c", str(sample_file))
    assert code == 0
    assert out.splitlines() == ["c is prefix of 2 words"]


def test_custom_sentinel(session, sample_file):
    code, out, _, _ = session("0 q cat", str(sample_file), sentinel="q")
    assert code == 0
    assert out.splitlines() == ["0 is not prefix"]


def test_missing_file_is_fatal(session, tmp_path):
    code, out, err, cli = session("cat 0", str(tmp_path / "nope.txt"))
    assert code == 1
    assert out == ""
    assert "error:" in err and "nope.txt" in err
    assert cli.index is None


def test_no_filename_at_all(session):
    code, out, err, _ = session("")
    assert code == 1
    assert "no input file" in err


def test_metrics_recorded(session, sample_file):
    code, _, err, cli = session("ca cat dog 0", str(sample_file), show_stats=True)
    assert code == 0
    assert cli.metrics.count("build_time") == 1
    assert cli.metrics.count("query_time") == 1
    assert cli.metrics.total("queries") == 3
    assert "Metrics" in err


def test_read_tokens_splits_on_any_whitespace():
    assert list(read_tokens(io.StringIO(" a\tb\n\n c  \n"))) == ["a", "b", "c"]


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.file is None
    assert args.stats is False
    assert args.set == []


def test_main_end_to_end(monkeypatch, capsys, sample_file, tmp_path):
    monkeypatch.setattr(sys, "stdin", io.StringIO("cat ca 0\n"))
    code = main([str(sample_file), "--config", str(tmp_path / "cfg.json")])
    assert code == 0
    out = capsys.readouterr().out
    assert out.splitlines() == [
        "cat is prefix of 1 words",
        "cat is at (0,8)",
        "ca is prefix of 2 words",
    ]


def test_main_missing_file_exit_status(monkeypatch, capsys, tmp_path):
    monkeypatch.setattr(sys, "stdin", io.StringIO("0\n"))
    code = main([str(tmp_path / "absent.txt"), "--config", str(tmp_path / "cfg.json")])
    assert code == 1
    assert capsys.readouterr().out == ""


def test_main_set_persists_option(monkeypatch, capsys, sample_file, tmp_path):
    cfg_path = tmp_path / "cfg.json"
    monkeypatch.setattr(sys, "stdin", io.StringIO("cat end\n"))
    code = main([str(sample_file), "--config", str(cfg_path), "--set", "sentinel=end"])
    assert code == 0
    assert Config(str(cfg_path)).get("sentinel") == "end"
    assert capsys.readouterr().out.splitlines()[0] == "cat is prefix of 1 words"


def test_main_bad_set(capsys, tmp_path):
    code = main(["--config", str(tmp_path / "cfg.json"), "--set", "nokey"])
    assert code == 2
    code = main(["--config", str(tmp_path / "cfg.json"), "--set", "bogus=1"])
    assert code == 2


def test_main_log_file(monkeypatch, sample_file, tmp_path):
    log_path = tmp_path / "logs" / "run.log"
    monkeypatch.setattr(sys, "stdin", io.StringIO("cat 0\n"))
    code = main([str(sample_file), "--config", str(tmp_path / "cfg.json"), "--log-file", str(log_path)])
    assert code == 0
    text = log_path.read_text(encoding="utf-8")
    assert "build_time" in text
    assert "2 tokens" in text


def test_main_show_config(capsys, tmp_path):
    code = main(["--config", str(tmp_path / "cfg.json"), "--sentinel", "stop", "--show-config"])
    assert code == 0
    out = capsys.readouterr().out
    assert "sentinel" in out and "stop" in out
    assert not (tmp_path / "cfg.json").exists()


def test_int_sentinel_in_config_file_still_ends_session(monkeypatch, capsys, sample_file, tmp_path):
    cfg_path = tmp_path / "cfg.json"
    cfg_path.write_text('{"sentinel": 7}', encoding="utf8")
    monkeypatch.setattr(sys, "stdin", io.StringIO("cat 7 car\n"))
    code = main([str(sample_file), "--config", str(cfg_path)])
    assert code == 0
    assert capsys.readouterr().out.splitlines() == ["cat is prefix of 1 words", "cat is at (0,8)"]


def test_unknown_encoding_is_fatal(session, sample_file):
    code, out, err, _ = session("cat 0", str(sample_file), encoding="no-such-codec")
    assert code == 1
    assert out == ""
    assert "no-such-codec" in err
