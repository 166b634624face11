"""
gui.py - Graphical Connect Four using Tkinter

Shows:
- A main menu: resume, new game, board size, save, load, exit
- The board, with a ghost disk over the column under the pointer
- The winning line once somebody connects four
- A strip with the most recent moves (1-based columns, coloured by player)

Left click drops a disk, Escape returns to the menu.
"""

import tkinter as tk
from typing import Callable, Optional

from connect4play.debug import debug
from connect4play.interfaces.layout import WINDOW_HEIGHT, WINDOW_WIDTH, BoardLayout
from connect4play.interfaces.session import GameSession
from connect4play.utils import Player

BACKGROUND_COLOR = "#000000"
BOARD_COLOR = "#ffffff"
WINNER_COLOR = "#ffff00"
DISK_COLORS = {
    Player.RED: "#ff0000",
    Player.BLUE: "#0000ff",
}

NORMAL_BUTTON = "#262626"
HOVERED_BUTTON = "#404040"
PRESSED_BUTTON = "#59bf59"
FONT_COLOR = "#ffffff"
TITLE_FONT = ("Helvetica", 48, "bold")
BUTTON_FONT = ("Helvetica", 20, "bold")
TEXT_FONT = ("Helvetica", 16)

END_OF_GAME_DELAY_MS = 1500  # Time the finished board stays up before the menu


class Connect4App:
    """
    Main window: a menu frame and a board frame, one shown at a time.
    """

    def __init__(self, session: GameSession, root: Optional[tk.Tk] = None):
        self.session = session
        self.root = root or tk.Tk()
        self.root.title("Connect 4")
        self.root.configure(bg=BACKGROUND_COLOR)
        self.root.resizable(False, False)

        self.hover_col: Optional[int] = None
        self._pending_menu: Optional[str] = None

        self._create_menu()
        self._create_board_view()
        self.root.bind("<Escape>", self._on_escape)

        self.show_menu()

    # ----- menu -----

    def _make_button(self, parent: tk.Widget, text: str, command: Callable[[], None]) -> tk.Button:
        button = tk.Button(
            parent, text=text, command=command, font=BUTTON_FONT,
            bg=NORMAL_BUTTON, fg=FONT_COLOR, activebackground=PRESSED_BUTTON,
            activeforeground=FONT_COLOR, disabledforeground="#666666",
            relief=tk.FLAT, padx=20, pady=6, width=12
        )
        button.bind("<Enter>", lambda e: button.configure(bg=HOVERED_BUTTON))
        button.bind("<Leave>", lambda e: button.configure(bg=NORMAL_BUTTON))
        return button

    def _create_menu(self):
        self.menu_frame = tk.Frame(self.root, bg=BACKGROUND_COLOR,
                                   width=WINDOW_WIDTH, height=WINDOW_HEIGHT)

        tk.Label(self.menu_frame, text="Connect 4", font=TITLE_FONT,
                 fg=FONT_COLOR, bg=BACKGROUND_COLOR).pack(pady=(60, 10))

        self.result_label = tk.Label(self.menu_frame, text="", font=BUTTON_FONT,
                                     fg=WINNER_COLOR, bg=BACKGROUND_COLOR)
        self.result_label.pack(pady=(0, 10))

        self.resume_button = self._make_button(self.menu_frame, "Resume", self._on_resume)
        self.resume_button.pack(pady=5)
        self._make_button(self.menu_frame, "New Game", self._on_new_game).pack(pady=5)

        # Board size picker: rows -/+ and cols -/+ around a "rows x cols" label
        size_frame = tk.Frame(self.menu_frame, bg=BACKGROUND_COLOR)
        size_frame.pack(pady=10)
        for text, step in (("Rows -", "decrease_rows"), ("Rows +", "increase_rows")):
            self._size_button(size_frame, text, step).pack(side=tk.LEFT, padx=4)
        self.size_label = tk.Label(size_frame, text="", font=BUTTON_FONT, width=6,
                                   fg=FONT_COLOR, bg=BACKGROUND_COLOR)
        self.size_label.pack(side=tk.LEFT, padx=10)
        for text, step in (("Cols -", "decrease_cols"), ("Cols +", "increase_cols")):
            self._size_button(size_frame, text, step).pack(side=tk.LEFT, padx=4)

        self.save_button = self._make_button(self.menu_frame, "Save", self._on_save)
        self.save_button.pack(pady=5)
        self._make_button(self.menu_frame, "Load", self._on_load).pack(pady=5)
        self._make_button(self.menu_frame, "Exit", self._on_exit).pack(pady=5)

        self.message_label = tk.Label(self.menu_frame, text="", font=TEXT_FONT,
                                      fg=FONT_COLOR, bg=BACKGROUND_COLOR, wraplength=WINDOW_WIDTH - 40)
        self.message_label.pack(pady=(20, 0))

    def _size_button(self, parent: tk.Widget, text: str, step: str) -> tk.Button:
        # Looked up on every click: a load replaces the session's BoardSize
        def on_click():
            getattr(self.session.board_size, step)()
            self._refresh_menu()

        button = self._make_button(parent, text, on_click)
        button.configure(width=6, padx=6)
        return button

    def _refresh_menu(self):
        self.size_label.configure(text=self.session.board_size.label())
        state = tk.NORMAL if self.session.allow_resume else tk.DISABLED
        # Save is offered only while there is a game to come back to
        self.resume_button.configure(state=state)
        self.save_button.configure(state=state)

        winner = self.session.game.get_winner()
        if winner is not None:
            self.result_label.configure(text=f"{winner.display_name} wins!",
                                        fg=DISK_COLORS[winner])
        elif self.session.game.is_game_over():
            self.result_label.configure(text="Draw!", fg=WINNER_COLOR)
        else:
            self.result_label.configure(text="")
        self.message_label.configure(text=self.session.last_message)

    def show_menu(self):
        self._cancel_pending_menu()
        self.session.in_menu = True
        self.board_frame.pack_forget()
        self.menu_frame.pack(fill=tk.BOTH, expand=True)
        self.menu_frame.pack_propagate(False)
        self._refresh_menu()
        debug.debug("Showing menu", "gui")

    def _on_resume(self):
        if self.session.resume():
            self.show_board()

    def _on_new_game(self):
        self.session.new_game()
        self.show_board()

    def _on_save(self):
        # Saving returns to the game; a failure is reported in the menu
        if self.session.save() and self.session.resume():
            self.show_board()
        else:
            self._refresh_menu()

    def _on_load(self):
        if self.session.load():
            self.show_board()
        else:
            self._refresh_menu()

    def _on_exit(self):
        debug.info("Exiting", "gui")
        self.root.destroy()

    # ----- board -----

    def _create_board_view(self):
        self.board_frame = tk.Frame(self.root, bg=BACKGROUND_COLOR)

        self.status_label = tk.Label(self.board_frame, text="", font=BUTTON_FONT,
                                     fg=FONT_COLOR, bg=BACKGROUND_COLOR)
        self.status_label.pack(fill=tk.X, pady=(4, 4))

        self.canvas = tk.Canvas(self.board_frame, width=WINDOW_WIDTH, height=WINDOW_HEIGHT,
                                bg=BACKGROUND_COLOR, highlightthickness=0)
        self.canvas.pack()
        self.canvas.bind("<Motion>", self._on_motion)
        self.canvas.bind("<Leave>", self._on_leave)
        self.canvas.bind("<Button-1>", self._on_click)

    @property
    def layout(self) -> BoardLayout:
        return BoardLayout(self.session.game.rows, self.session.game.cols)

    def show_board(self):
        self.menu_frame.pack_forget()
        self.board_frame.pack(fill=tk.BOTH, expand=True)
        self.hover_col = None
        self.redraw()
        debug.debug("Showing board", "gui")

    def redraw(self):
        game = self.session.game
        board = game.board
        layout = self.layout
        canvas = self.canvas
        canvas.delete("all")

        canvas.create_rectangle(*layout.board_box(), fill=BOARD_COLOR, outline="")
        for row in range(board.rows):
            for col in range(board.cols):
                canvas.create_oval(*layout.hole_box(row, col), fill=BACKGROUND_COLOR, outline="")
                cell = Player(int(board.grid[row, col]))
                if cell != Player.EMPTY:
                    canvas.create_oval(*layout.disk_box(row, col),
                                       fill=DISK_COLORS[cell], outline="")

        if self.hover_col is not None and not game.is_game_over():
            canvas.create_oval(*layout.ghost_box(self.hover_col),
                               fill=DISK_COLORS[game.get_current_player()],
                               outline="", stipple="gray50")

        stroke = layout.winner_line(game.get_winning_line())
        if stroke is not None:
            (x0, y0), (x1, y1), width = stroke
            canvas.create_line(x0, y0, x1, y1, fill=WINNER_COLOR, width=width,
                               capstyle=tk.ROUND)

        self._draw_history(layout)
        self.status_label.configure(text=self.session.status_text())

    def _draw_history(self, layout: BoardLayout):
        history = self.session.game.get_history()
        for index, (col, player) in enumerate(reversed(history)):
            slot = layout.history_slot(index)
            if slot is None:
                break
            x0, y0, x1, y1 = slot
            self.canvas.create_text((x0 + x1) / 2, (y0 + y1) / 2, text=str(col + 1),
                                    fill=DISK_COLORS[player], font=BUTTON_FONT)

    def _on_motion(self, event):
        col = self.layout.column_at(event.x, event.y)
        if col != self.hover_col:
            self.hover_col = col
            self.redraw()

    def _on_leave(self, event):
        if self.hover_col is not None:
            self.hover_col = None
            self.redraw()

    def _on_click(self, event):
        if self.session.game.is_game_over():
            return
        col = self.layout.column_at(event.x, event.y)
        if col is None:
            return

        outcome = self.session.drop(col)
        if not outcome.accepted:
            self.redraw()
            self.status_label.configure(text=outcome.message)
            return

        self.redraw()
        if outcome.game_over:
            # Leave the final position on screen for a moment
            self._pending_menu = self.root.after(END_OF_GAME_DELAY_MS, self.show_menu)

    def _on_escape(self, event):
        if not self.session.in_menu:
            self.session.pause()
            self.show_menu()

    def _cancel_pending_menu(self):
        # Also called from the pending callback itself, where cancelling is a no-op
        if self._pending_menu is not None:
            self.root.after_cancel(self._pending_menu)
            self._pending_menu = None

    def run(self):
        """Start the Tkinter event loop."""
        self.root.mainloop()


def main(session: GameSession) -> None:
    """Open the game window and run until it is closed."""
    app = Connect4App(session)
    app.run()
