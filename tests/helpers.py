# Fills a 6x7 board without any four-in-a-row.
DRAW_MOVES = [0, 2, 2, 0] * 3 + [1, 3, 3, 1] * 3 + [4, 6, 6, 4] * 3 + [5, 5] * 3

# Player 1 stacks column 0 while Player 2 stacks column 1.
VERTICAL_WIN_MOVES = [0, 1, 0, 1, 0, 1, 0]

# Player 1 fills the bottom row 0-3, Player 2 the row above.
HORIZONTAL_WIN_MOVES = [0, 0, 1, 1, 2, 2, 3]


def play(engine, moves):
    """Drop tokens in the given columns, alternating players."""
    return [engine.drop_token(column) for column in moves]
