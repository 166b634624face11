"""Tests for GameSession, the state shared by the front ends."""

import pytest

from conftest import RED_HORIZONTAL_WIN
from connect4play.data.save_manager import load_game, save_game
from connect4play.game.rules import BoardSize, ConnectFourGame
from connect4play.interfaces.session import GameSession
from connect4play.utils import GameResult, Player


@pytest.fixture
def session(tmp_path):
    return GameSession(save_path=str(tmp_path / "save.json"))


def drop_all(session, moves):
    return [session.drop(column) for column in moves]


class TestMenuState:
    def test_starts_in_menu_without_resume(self, session):
        assert session.in_menu
        assert not session.allow_resume
        assert not session.resume()

    def test_new_game_uses_board_size(self, session):
        session.board_size.increase_rows()
        session.board_size.increase_cols()
        game = session.new_game()

        assert (game.rows, game.cols) == (7, 8)
        assert session.allow_resume
        assert not session.in_menu
        assert "7x8" in session.last_message

    def test_pause_and_resume(self, session):
        session.new_game()
        session.drop(3)
        session.pause()
        assert session.in_menu
        assert session.resume()
        assert not session.in_menu
        assert session.game.get_history() == [(3, Player.RED)]

    def test_finished_game_cannot_be_resumed(self, session):
        session.new_game()
        drop_all(session, RED_HORIZONTAL_WIN)
        assert not session.allow_resume

        session.pause()
        assert not session.resume()

    def test_undo_reopens_finished_game(self, session):
        session.new_game()
        drop_all(session, RED_HORIZONTAL_WIN)
        assert session.undo()
        assert session.allow_resume
        assert session.status_text() == "Red's turn"

    def test_undo_with_no_moves(self, session):
        session.new_game()
        assert not session.undo()
        assert session.last_message == "No moves to undo."

    def test_restart_keeps_size(self, session):
        session.board_size = BoardSize(8, 8)
        session.new_game()
        session.drop(0)
        session.restart()
        assert session.game.get_history() == []
        assert (session.game.rows, session.game.cols) == (8, 8)


class TestDrop:
    def test_accepted_move(self, session):
        session.new_game()
        outcome = session.drop(2)

        assert outcome.accepted
        assert outcome.player == Player.RED
        assert outcome.row == 5
        assert not outcome.game_over
        assert outcome.message == "Blue's turn"

    def test_rejected_move_keeps_the_session_going(self, session):
        session.new_game()
        outcome = session.drop(7)

        assert not outcome.accepted
        assert "off the board" in outcome.message
        assert session.last_message == outcome.message
        assert session.game.get_history() == []
        assert session.game.get_current_player() == Player.RED

        assert session.drop(6).accepted

    def test_winning_move(self, session):
        session.new_game()
        outcomes = drop_all(session, RED_HORIZONTAL_WIN)
        last = outcomes[-1]

        assert last.accepted
        assert last.game_over
        assert last.result == GameResult.RED_WIN
        assert last.winning_line == [(5, 0), (5, 1), (5, 2), (5, 3)]
        assert last.message == "Red wins!"

    def test_move_after_win_is_rejected(self, session):
        session.new_game()
        drop_all(session, RED_HORIZONTAL_WIN)
        outcome = session.drop(5)

        assert not outcome.accepted
        assert outcome.result == GameResult.RED_WIN
        assert "over" in outcome.message


class TestSaveLoad:
    def test_save_then_load(self, session):
        session.new_game()
        drop_all(session, [3, 3, 4])
        assert session.save()
        saved = session.game

        session.new_game()
        assert session.load()
        assert session.game == saved
        assert session.allow_resume
        assert not session.in_menu
        assert session.last_message.startswith("Game loaded.")

    def test_load_adopts_saved_board_size(self, session):
        save_game(ConnectFourGame(8, 9), session.save_path)
        assert session.load()
        assert session.board_size.label() == "8x9"

    def test_failed_load_keeps_current_game(self, session):
        session.new_game()
        session.drop(1)
        current = session.game

        assert not session.load()
        assert session.game is current
        assert session.game.get_history() == [(1, Player.RED)]
        assert session.last_message == "Load failed: No saved game found"

    def test_corrupt_save_keeps_current_game(self, session, tmp_path):
        session.new_game()
        (tmp_path / "save.json").write_text("not json")
        current = session.game

        assert not session.load()
        assert session.game is current
        assert "corrupt" in session.last_message

    def test_unreadable_save_keeps_current_game(self, session, tmp_path):
        session.new_game()
        session.drop(4)
        (tmp_path / "save.json").write_text("[" * 100000 + "]" * 100000)

        assert not session.load()
        assert session.game.get_history() == [(4, Player.RED)]
        assert "corrupt" in session.last_message

    def test_save_before_any_game_keeps_existing_file(self, session):
        existing = ConnectFourGame()
        for column in [0, 1, 2]:
            existing.make_move(column)
        save_game(existing, session.save_path)

        assert not session.save()
        assert session.last_message == "No game in progress to save."
        assert len(load_game(session.save_path).get_history()) == 3

    def test_finished_game_is_not_saved(self, session):
        session.new_game()
        drop_all(session, RED_HORIZONTAL_WIN)
        assert not session.save()

    def test_failed_save_is_reported(self, tmp_path):
        # The save file's parent is a regular file, so nothing can be written
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        session = GameSession(save_path=str(blocker / "save.json"))
        session.new_game()

        assert not session.save()
        assert session.last_message.startswith("Save failed:")

    def test_loading_a_finished_game_disallows_resume(self, session):
        game = ConnectFourGame()
        for column in RED_HORIZONTAL_WIN:
            game.make_move(column)
        save_game(game, session.save_path)

        assert session.load()
        assert not session.allow_resume
        assert session.status_text() == "Red wins!"
