"""Tests for saving and loading games."""

import json

import pytest

from conftest import (BLUE_VERTICAL_WIN, DRAW_6X7, RED_DIAGONAL_WIN,
                      RED_HORIZONTAL_WIN)
from connect4play.data.save_manager import (FORMAT_VERSION, game_from_dict,
                                            game_to_dict, load_game, save_game)
from connect4play.errors import SaveFileError
from connect4play.game.rules import ConnectFourGame
from connect4play.utils import GameResult, Player


def make_game(moves, rows=6, cols=7):
    game = ConnectFourGame(rows, cols)
    for column in moves:
        game.make_move(column)
    return game


def write_json(path, data):
    path.write_text(json.dumps(data))
    return path


@pytest.fixture
def save_path(tmp_path):
    return tmp_path / "save.json"


class TestGameToDict:
    def test_layout(self):
        data = game_to_dict(make_game([3, 3, 0]))

        assert data["version"] == FORMAT_VERSION
        assert data["board"]["rows"] == 6
        assert data["board"]["cols"] == 7
        assert data["turn"] == "Blue"
        assert data["history"]["moves"] == [[3, "Red"], [3, "Blue"], [0, "Red"]]

        disks = data["board"]["disks"]
        assert len(disks) == 7
        assert all(len(column) == 6 for column in disks)
        assert disks[3] == [None, None, None, None, "Blue", "Red"]
        assert disks[0][-1] == "Red"
        assert disks[6] == [None] * 6

    def test_is_json_serializable(self):
        json.dumps(game_to_dict(make_game(DRAW_6X7)))


class TestRoundTrip:
    @pytest.mark.parametrize("moves", [
        [],
        [3],
        [0, 1, 2, 3, 4],
        RED_HORIZONTAL_WIN,
        BLUE_VERTICAL_WIN,
        RED_DIAGONAL_WIN,
        DRAW_6X7,
    ])
    def test_save_then_load_reproduces_the_game(self, save_path, moves):
        game = make_game(moves)
        save_game(game, save_path)
        loaded = load_game(save_path)

        assert loaded == game
        assert loaded.get_result() == game.get_result()
        assert loaded.get_winning_line() == game.get_winning_line()
        assert loaded.get_history() == game.get_history()

    def test_round_trip_on_a_larger_board(self, save_path):
        game = make_game([0, 8, 8, 1, 9, 2], rows=9, cols=10)
        save_game(game, save_path)
        assert load_game(save_path) == game

    def test_loaded_game_can_continue(self, save_path):
        save_game(make_game(RED_HORIZONTAL_WIN[:-1]), save_path)
        loaded = load_game(save_path)

        loaded.make_move(RED_HORIZONTAL_WIN[-1])
        assert loaded.get_winner() == Player.RED

    def test_save_overwrites_previous_save(self, save_path):
        save_game(make_game([0, 1, 2]), save_path)
        save_game(make_game([6]), save_path)

        assert load_game(save_path).get_history() == [(6, Player.RED)]
        assert not save_path.with_name("save.json.tmp").exists()

    def test_save_returns_path(self, save_path):
        assert save_game(make_game([]), save_path) == str(save_path)


class TestLoadCompatibility:
    def test_file_without_version_loads(self, save_path):
        data = game_to_dict(make_game([2, 3]))
        del data["version"]
        write_json(save_path, data)

        assert load_game(save_path) == make_game([2, 3])

    def test_turn_of_a_finished_game_is_not_checked(self, save_path):
        data = game_to_dict(make_game(RED_HORIZONTAL_WIN))
        data["turn"] = "Blue"
        write_json(save_path, data)

        assert load_game(save_path).get_result() == GameResult.RED_WIN


class TestLoadFailures:
    def test_missing_file(self, save_path):
        with pytest.raises(SaveFileError) as excinfo:
            load_game(save_path)
        assert excinfo.value.reason == "No saved game found"
        assert excinfo.value.path == str(save_path)

    def test_corrupt_json(self, save_path):
        save_path.write_text('{"board": {"rows": 6,')
        with pytest.raises(SaveFileError, match="corrupt"):
            load_game(save_path)

    def test_deeply_nested_json(self, save_path):
        save_path.write_text("[" * 100000 + "]" * 100000)
        with pytest.raises(SaveFileError, match="corrupt"):
            load_game(save_path)

    def test_number_too_long_to_read(self, save_path):
        # Newer Pythons refuse to parse the number; older ones see a bad version
        save_path.write_text('{"version": ' + "1" * 5000 + "}")
        with pytest.raises(SaveFileError):
            load_game(save_path)

    def test_not_a_game(self, save_path):
        write_json(save_path, [1, 2, 3])
        with pytest.raises(SaveFileError, match="does not hold a game"):
            load_game(save_path)

    def test_unknown_version(self, save_path):
        data = game_to_dict(make_game([]))
        data["version"] = 99
        write_json(save_path, data)
        with pytest.raises(SaveFileError, match="version"):
            load_game(save_path)


def corrupted(mutate, moves=(0, 1, 1)):
    data = game_to_dict(make_game(list(moves)))
    mutate(data)
    return data


class TestValidation:
    @pytest.mark.parametrize("mutate,fragment", [
        (lambda d: d.pop("board"), "no board"),
        (lambda d: d["board"].update(rows="6"), "size is missing"),
        (lambda d: d["board"].update(rows=4), "at least"),
        (lambda d: d["board"].update(cols=10), "differ"),
        (lambda d: d["board"]["disks"].pop(), "7 columns"),
        (lambda d: d["board"]["disks"][0].pop(), "6 cells"),
        (lambda d: d["board"]["disks"][0].__setitem__(5, "Green"), "Unknown disk"),
        (lambda d: d["board"]["disks"][4].__setitem__(0, "Red"), "floating"),
        (lambda d: d.pop("history"), "no move history"),
        (lambda d: d["history"]["moves"].append("oops"), "malformed"),
        (lambda d: d["history"]["moves"].__setitem__(0, [0, "Pink"]), "unknown player"),
        (lambda d: d["history"]["moves"].__setitem__(1, [1, "Red"]), "out of turn"),
        (lambda d: d["history"]["moves"].pop(), "does not match"),
        (lambda d: d.update(turn="Red"), "Red's turn"),
        (lambda d: d.update(turn="Nobody"), "whose turn"),
    ])
    def test_invalid_data_is_rejected(self, mutate, fragment):
        with pytest.raises(SaveFileError, match=fragment):
            game_from_dict(corrupted(mutate), "test")

    def test_history_that_overfills_a_column(self):
        data = game_to_dict(make_game([0] * 6))
        data["history"]["moves"].append([0, "Red"])
        with pytest.raises(SaveFileError, match="not playable"):
            game_from_dict(data)

    def test_moves_after_the_game_ended(self):
        data = game_to_dict(make_game(RED_HORIZONTAL_WIN))
        data["history"]["moves"].append([6, "Blue"])
        with pytest.raises(SaveFileError):
            game_from_dict(data)

    def test_failed_load_does_not_touch_the_file(self, save_path):
        write_json(save_path, {"board": None})
        before = save_path.read_text()
        with pytest.raises(SaveFileError):
            load_game(save_path)
        assert save_path.read_text() == before
