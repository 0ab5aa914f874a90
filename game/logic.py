from collections import namedtuple

# rows top-to-bottom, columns left-to-right, then the two diagonals
WIN_LINES = [
    (0,1,2),(3,4,5),(6,7,8),
    (0,3,6),(1,4,7),(2,5,8),
    (0,4,8),(2,4,6)
]

EMPTY_BOARD = (None,) * 9
START_POSITION = (0, 0)   # placeholder for the initial entry, never displayed


def check_win(board):
    """Return (winner, [a, b, c]) for the first complete line, else (None, [])."""
    for a, b, c in WIN_LINES:
        if board[a] and board[a] == board[b] == board[c]:
            return board[a], [a, b, c]
    return None, []


class StepOutOfRange(IndexError):
    pass


HistoryEntry = namedtuple("HistoryEntry", ["board", "position"])


class GameHistory:
    """Append-only list of board snapshots; index 0 is the empty board."""

    def __init__(self):
        self._entries = [HistoryEntry(EMPTY_BOARD, START_POSITION)]

    def append(self, board, position):
        self._entries.append(HistoryEntry(tuple(board), tuple(position)))

    def entry_at(self, index):
        if not 0 <= index < len(self._entries):
            raise StepOutOfRange(f"step {index} not in [0, {len(self._entries)})")
        return self._entries[index]

    def __len__(self): return len(self._entries)
    def __iter__(self): return iter(self._entries)


class TicTacToe:
    def __init__(self):
        self.history = GameHistory()
        self._step = 0
        self._ascending = True

    @property
    def step_number(self): return self._step

    @property
    def ascending(self): return self._ascending

    @property
    def x_is_next(self): return self._step % 2 == 0

    def current_board(self):
        return self.history.entry_at(self._step).board

    def play_at(self, index):
        if not 0 <= index < 9:
            raise IndexError(f"cell {index} not in [0, 9)")
        board = list(self.current_board())
        winner, _ = check_win(board)
        if winner or board[index]: return False
        board[index] = "X" if self.x_is_next else "O"
        # no truncation: moves played after a jump land at the end of history
        self.history.append(board, divmod(index, 3))
        self._step = len(self.history) - 1
        return True

    def jump_to(self, step):
        self.history.entry_at(step)
        self._step = step

    def toggle_order(self):
        self._ascending = not self._ascending

    def winning_line(self):
        return check_win(self.current_board())[1]

    def status(self):
        board = self.current_board()
        winner, _ = check_win(board)
        if winner:
            return "Winner: " + winner
        if any(cell is None for cell in board):
            return "Next player: " + ("X" if self.x_is_next else "O")
        return "The game ended in a draw."

    def move_list(self):
        moves = []
        for move, entry in enumerate(self.history):
            if move:
                row, col = entry.position
                label = f"Go to move #{move} ({row}, {col})"
            else:
                label = "Go to game start"
            moves.append({"step": move, "label": label})
        if not self._ascending:
            moves.reverse()
        return moves

    def order_label(self):
        if self._ascending:
            return "Ascending (click to switch to descending)"
        return "Descending (click to switch to ascending)"

    def state(self):
        return {
            "board":       list(self.current_board()),
            "winLine":     self.winning_line(),
            "status":      self.status(),
            "stepNumber":  self._step,
            "xIsNext":     self.x_is_next,
            "ascending":   self._ascending,
            "orderLabel":  self.order_label(),
            "moves":       self.move_list(),
        }
