import json
from collections import Counter

import pytest

from flashdeck.modules.flashcards.cli import main


def _json_lines(out: str) -> list[dict]:
    return [json.loads(line) for line in out.splitlines() if line.strip()]


def test_load_json(deck_file, capsys):
    assert main(["--quiet", "load", "--source", str(deck_file), "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["total"] == 3
    assert [c["question"] for c in payload["cards"]] == ["Q1", "Q2", "Q3"]


def test_load_human_output(deck_file, capsys):
    assert main(["--quiet", "load", "-s", str(deck_file)]) == 0
    out = capsys.readouterr().out
    assert "=== Deck v0 (3 cards) ===" in out
    assert "Q: Q2" in out
    assert "A: A3" in out


def test_load_bundled_deck(capsys):
    assert main(["--quiet", "load", "--json"]) == 0
    assert json.loads(capsys.readouterr().out)["total"] == 10


def test_missing_source_exits_with_1(missing_file, capsys):
    assert main(["--quiet", "load", "--source", str(missing_file)]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "unavailable" in captured.err


def test_shuffle_with_seed_is_reproducible(deck_file, capsys):
    args = ["--quiet", "shuffle", "--source", str(deck_file), "--seed", "42", "--json"]
    assert main(args) == 0
    first = json.loads(capsys.readouterr().out)
    assert main(args) == 0
    second = json.loads(capsys.readouterr().out)
    assert first == second
    assert sorted(c["question"] for c in first["cards"]) == ["Q1", "Q2", "Q3"]


def test_watch_prints_each_reshuffle(deck_file, capsys):
    code = main(
        [
            "--quiet",
            "watch",
            "--source",
            str(deck_file),
            "--interval",
            "0.01",
            "--rounds",
            "2",
            "--json",
        ]
    )
    assert code == 0
    decks = _json_lines(capsys.readouterr().out)
    assert [d["version"] for d in decks] == [0, 1, 2]
    initial = Counter(c["question"] for c in decks[0]["cards"])
    assert all(Counter(c["question"] for c in d["cards"]) == initial for d in decks)


def test_watch_missing_source_exits_with_1(missing_file, capsys):
    assert main(["--quiet", "watch", "--source", str(missing_file), "--rounds", "1"]) == 1
    assert "unavailable" in capsys.readouterr().err


@pytest.mark.parametrize("interval", ["0", "-1", "soon"])
def test_watch_rejects_bad_interval(interval, deck_file):
    with pytest.raises(SystemExit) as exc_info:
        main(["watch", "--source", str(deck_file), "--interval", interval])
    assert exc_info.value.code == 2


def test_subcommand_required():
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 2


@pytest.mark.parametrize("rounds", ["-1", "two"])
def test_watch_rejects_bad_rounds(rounds, deck_file):
    with pytest.raises(SystemExit) as exc_info:
        main(["watch", "--source", str(deck_file), "--rounds", rounds])
    assert exc_info.value.code == 2
