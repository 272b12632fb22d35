import io
from unittest import mock

import pytest

from landlord.board import WorldMap, parse_map
from landlord.console import Console
from landlord.game import (
    DEFAULT_NAMES,
    PASS_GO_REWARD,
    Game,
    format_board,
    format_player_status,
    main,
    read_player_count,
    read_player_names,
)
from landlord.player import STARTING_MONEY, PlayerRoster, PlayerStatus


class FixedRng:
    def __init__(self, values):
        self._values = iter(values)

    def randint(self, low, high):
        return next(self._values)


def make_console(lines):
    feed = iter(lines)

    def read():
        try:
            return next(feed)
        except StopIteration:
            raise EOFError from None

    output = io.StringIO()
    return Console(input_func=read, output=output), output


MAP_LINES = [
    "J Start",
    "U Home 1000 500 10 20 30 40 50000",
    "J Jail",
    "C Shop 800 100",
    "R Casino 900 50",
]


def make_game(lines, names=("Ann", "Bob"), rolls=(1,), map_lines=MAP_LINES):
    console, output = make_console(lines)
    world_map = parse_map(map_lines, len(names))
    roster = PlayerRoster(names)
    game = Game(world_map, roster, console, FixedRng(rolls), clear=lambda: None)
    return game, output


def test_format_board_empty_map():
    assert format_board(WorldMap([])) == ""


def test_format_board_even_layout():
    world_map = parse_map(["J A", "J B", "J C", "J D"], 2)
    lines = format_board(world_map).splitlines()
    assert len(lines) == 2
    assert lines[0].startswith(world_map[0].display())
    assert lines[0][40:].rstrip() == world_map[3].display().rstrip()
    assert lines[1].startswith(world_map[1].display())
    assert lines[1][40:].rstrip() == world_map[2].display().rstrip()


def test_format_player_status_marks_current_and_skips_bankrupt():
    roster = PlayerRoster(["Ann", "Bob", "Cid"])
    roster[2].declare_bankruptcy()
    text = format_player_status(roster, 1)
    lines = [line for line in text.splitlines() if line]
    assert len(lines) == 2
    assert lines[0].startswith("  [0]")
    assert lines[1].startswith("=>[1]")
    assert f"${STARTING_MONEY}" in lines[0]
    assert lines[0].endswith("with 0 units")
    assert "Cid" not in text


def test_format_player_status_truncates_name():
    roster = PlayerRoster(["ABCDEFGHIJKLMNOPQRST"])
    text = format_player_status(roster, 0)
    assert "ABCDEFGHIJKLMNO " in text
    assert "ABCDEFGHIJKLMNOP" not in text


@pytest.mark.parametrize(
    "answer, expected",
    [("3", 3), ("9", 4), ("0", 1), ("-2", 1), (" 2 extra", 2), ("abc", None), ("", None)],
)
def test_read_player_count(answer, expected):
    console, output = make_console([answer])
    assert read_player_count(console) == expected
    assert output.getvalue() == "How many players?(Maximum:4)...>"


def test_read_player_names_keeps_defaults_for_empty_answers():
    console, output = make_console(["", "Bob"])
    assert read_player_names(console, 2) == [DEFAULT_NAMES[0], "Bob"]
    assert "(Default: Little-Mei)" in output.getvalue()


def test_game_rejects_empty_map():
    console, _ = make_console([])
    with pytest.raises(ValueError):
        Game(WorldMap([]), PlayerRoster(["Ann"]), console, clear=lambda: None)


def test_players_start_on_first_unit():
    game, _ = make_game([])
    assert game.world_map[0].players_here() == tuple(game.roster)


def test_show_writes_board_and_status():
    game, output = make_game([])
    game.show()
    text = output.getvalue()
    first_board_line = format_board(game.world_map).splitlines()[0]
    assert first_board_line in text
    assert "=>[0]" in text
    assert "  [1]" in text


def test_play_turn_moves_player():
    game, _ = make_game(["", "2", ""], rolls=[3])
    assert game.play_turn() is True
    ann = game.roster[0]
    assert ann.location == 3
    assert game.world_map[3].players_here()[0] is ann
    assert game.world_map[0].players_here()[0] is None
    assert game.world_map[3].host is None
    assert game.current_index == 1


def test_passing_start_pays_reward_and_jail_visit():
    game, _ = make_game(["", ""], rolls=[4])
    ann = game.roster[0]
    ann.move_to(3, game.world_map)
    assert game.play_turn() is True
    assert ann.location == 2
    assert ann.money == STARTING_MONEY + PASS_GO_REWARD
    assert ann.status is PlayerStatus.IN_JAIL


def test_jailed_player_misses_turn():
    game, output = make_game(["", ""])
    ann = game.roster[0]
    ann.set_to_jail()
    assert game.play_turn() is True
    assert ann.status is PlayerStatus.NORMAL
    assert ann.location == 0
    assert game.current_index == 1
    assert "Ann is in jail and misses a turn." in output.getvalue()


def test_exit_choice_ends_game():
    game, _ = make_game(["2"])
    assert game.play_turn() is False
    assert game.roster[0].location == 0


def test_bankruptcy_ends_two_player_game():
    game, output = make_game(["", ""], rolls=[1])
    ann, bob = game.roster
    home = game.world_map[1]
    home.host = bob
    bob.add_unit(home)
    for _ in range(4):
        home.upgrade()
    shop = game.world_map[3]
    shop.host = ann
    ann.add_unit(shop)
    ann.money = 100
    assert game.play_turn() is False
    assert ann.status is PlayerStatus.BANKRUPT
    assert bob.money == STARTING_MONEY + 100
    assert shop.host is None
    assert ann.unit_count() == 0
    assert "Ann is bankrupt!" in output.getvalue()


def test_bankrupt_player_is_skipped():
    game, _ = make_game([])
    game.roster[0].declare_bankruptcy()
    assert game.play_turn() is True
    assert game.current_index == 1


def test_run_reports_end():
    game, output = make_game(["2"])
    game.run()
    assert output.getvalue().endswith("The winner is determined!\n")


def test_main_single_player_game(tmp_path, monkeypatch, capsys):
    map_file = tmp_path / "board.dat"
    map_file.write_text("J Start\n", encoding="utf-8")
    monkeypatch.setattr("sys.stdin", io.StringIO("1\n\n\n\n"))
    with mock.patch("landlord.game.subprocess.run"):
        assert main(["--map", str(map_file)]) == 0
    out = capsys.readouterr().out
    assert "A-Tu is visiting the Jail." in out
    assert out.endswith("The winner is determined!\n")


def test_main_missing_map(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("1\n\n"))
    with mock.patch("landlord.game.subprocess.run"):
        assert main(["--map", str(tmp_path / "missing.dat")]) == 1
    assert "Failed to open" in capsys.readouterr().err