import numpy as np

from block_blast.game import Cell, CellKind, board_cells, decode_cell
from block_blast.game.cells import encode_cell


def test_decode_distinguishes_empty_filled_and_clearing():
    assert decode_cell(0) == Cell(CellKind.EMPTY, 0)
    assert decode_cell(4) == Cell(CellKind.FILLED, 4)
    assert decode_cell(-4) == Cell(CellKind.CLEARING, 4)


def test_encode_inverts_decode():
    for value in (-6, -1, 0, 1, 6):
        assert encode_cell(decode_cell(value)) == value


def test_board_cells_view():
    board = np.zeros((8, 8), dtype=np.int8)
    board[0, 1] = 2
    board[7, 7] = -5
    cells = board_cells(board)
    assert len(cells) == 8 and all(len(row) == 8 for row in cells)
    assert cells[0][1].kind == CellKind.FILLED and cells[0][1].color == 2
    assert cells[7][7].kind == CellKind.CLEARING and cells[7][7].color == 5
    assert cells[3][3].kind == CellKind.EMPTY
