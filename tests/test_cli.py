"""Tests for the console front end."""

import pytest

import cli


def test_run_all_prints_comparison(capsys) -> None:
    status = cli.main(["-n", "3", "-a", "all", "1", "2", "3", "1", "2", "4", "5", "1"])
    out = capsys.readouterr().out
    assert status == 0
    assert "Efficient Page Replacement Algorithm Simulator" in out
    assert "COMPARISON TABLE" in out
    for name in ("FIFO", "LRU", "Optimal", "LFU", "Second Chance"):
        assert f"=== {name} SUMMARY ===" in out


def test_single_policy_by_menu_number(capsys) -> None:
    status = cli.main(["-n", "2", "-a", "2", "1", "2", "1", "3"])
    out = capsys.readouterr().out
    assert status == 0
    assert "LRU - Step-wise Simulation" in out
    assert "COMPARISON TABLE" not in out


def test_verbose_prints_event_log(capsys) -> None:
    cli.main(["-v", "-n", "1", "-a", "fifo", "1", "2"])
    out = capsys.readouterr().out
    assert "--- FIFO event log ---" in out
    assert "Evicting: Page 1 from Frame 0" in out


def test_invalid_choice(capsys) -> None:
    status = cli.main(["-n", "3", "-a", "9", "1", "2"])
    assert status == 2
    assert "Invalid choice." in capsys.readouterr().out


def test_invalid_frame_count(capsys) -> None:
    """Configuration errors stop before any simulation output."""
    status = cli.main(["-n", "0", "-a", "fifo", "1", "2"])
    out = capsys.readouterr().out
    assert status == 2
    assert out.startswith("Error:")
    assert "Step-wise" not in out


def test_interactive_prompts(monkeypatch, capsys) -> None:
    answers = iter(["4", "1 2 1 3", "2", "5"])
    monkeypatch.setattr("builtins.input", lambda *_: next(answers))

    status = cli.main([])
    out = capsys.readouterr().out
    assert status == 0
    assert "6. Run All & Compare" in out
    assert "=== Second Chance SUMMARY ===" in out


def test_interactive_bad_number(monkeypatch, capsys) -> None:
    monkeypatch.setattr("builtins.input", lambda *_: "four")
    assert cli.main([]) == 2
    assert "valid integers" in capsys.readouterr().out


@pytest.mark.parametrize("argv", [["-n", "3", "-a", "opt"], ["-n", "3", "-a", "sc"]])
def test_aliases_with_empty_pages_prompt(monkeypatch, capsys, argv) -> None:
    answers = iter(["0", ""])
    monkeypatch.setattr("builtins.input", lambda *_: next(answers))
    assert cli.main(argv) == 0
    assert "Total Hits   : 0" in capsys.readouterr().out


def test_non_ascii_digit_choice(capsys) -> None:
    """A digit character that is not a menu number is an invalid choice."""
    status = cli.main(["-n", "3", "-a", "²", "1", "2"])
    assert status == 2
    assert "Invalid choice." in capsys.readouterr().out


@pytest.mark.parametrize("answers", [
    ["3", "1 2"],        # fewer pages than declared
    ["2", "1 2 3"],      # more pages than declared
    ["-2", "1 2 3 4"],   # negative length
])
def test_interactive_length_mismatch(monkeypatch, capsys, answers) -> None:
    replies = iter(answers)
    monkeypatch.setattr("builtins.input", lambda *_: next(replies))
    assert cli.main([]) == 2
    out = capsys.readouterr().out
    assert "valid integers" in out
    assert "Step-wise" not in out
