"""
Error taxonomy for the game core.

- ConstructionError: an object cannot be built from the given values.
- OutOfRangeError: a cell index outside 0..8 was passed to a query.
- IllegalMoveError: wrong player's turn, occupied cell, finished round, or a locked board.
"""


class TicTacToeError(Exception):
    pass


class ConstructionError(TicTacToeError, ValueError):
    pass


class OutOfRangeError(TicTacToeError, IndexError):
    def __init__(self, index: object):
        super().__init__(f"Index value is not valid: {index}")
        self.index = index


class IllegalMoveError(TicTacToeError):
    pass
