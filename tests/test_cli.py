"""Tests for the command-line entry point."""

import logging

from shopdispatch.cli import build_parser, main

SHOPS_INPUT = """\
2
A B 1
B A 1
1
A
1
B
"""


def test_shop_policy_from_file(tmp_path, capsys):
    path = tmp_path / "simulation.txt"
    path.write_text(SHOPS_INPUT, encoding="utf-8")

    assert main([str(path), "--policy", "shops"]) == 0

    captured = capsys.readouterr()
    assert captured.out == "client B\ntaxi A\nA B\nshop A\nB A\n"


def test_policy_from_environment(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv("SDS_DISPATCH_POLICY", "taxis")
    path = tmp_path / "simulation.txt"
    path.write_text("2\nT C 1\nC S 2\n1\nS\n1\nT\n1\nC S\n", encoding="utf-8")

    assert main([str(path), "--no-cache"]) == 0

    assert capsys.readouterr().out == "client C\ntaxi T\nT C\nshop S\nC S\n"


def test_malformed_shop_input_exits_with_error(tmp_path, capsys):
    path = tmp_path / "bad.txt"
    path.write_text("one\n", encoding="utf-8")

    assert main([str(path)]) == 1

    assert "Incorrect input at line 1" in capsys.readouterr().err


def test_missing_file_exits_with_error(tmp_path, capsys):
    assert main([str(tmp_path / "absent.txt")]) == 1

    assert "Cannot read" in capsys.readouterr().err


def test_parser_defaults():
    args = build_parser().parse_args([])

    assert args.input == "-"
    assert args.policy is None
    assert args.workers is None
    assert args.no_cache is False


def test_run_cache_size_logged_at_debug(tmp_path, caplog):
    caplog.set_level(logging.DEBUG, logger="shopdispatch.cli")
    path = tmp_path / "simulation.txt"
    path.write_text(SHOPS_INPUT, encoding="utf-8")

    assert main([str(path)]) == 0

    records = [record for record in caplog.records if record.getMessage() == "Run cache filled"]
    assert len(records) == 1
    assert records[0].entries == 2
