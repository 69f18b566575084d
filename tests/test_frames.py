import numpy as np

from block_blast.game.frames import changed_cells, clear_keyframes, explosion_keyframes


def test_no_lines_gives_single_frame():
    board = np.zeros((8, 8), dtype=np.int8)
    board[1, 1] = 3
    frames = clear_keyframes(board, [], [])
    assert len(frames) == 1
    assert np.array_equal(frames[0], board)


def test_clear_frames_mark_then_empty_lines():
    board = np.zeros((8, 8), dtype=np.int8)
    board[:, 6] = 1
    board[2, :] = 4
    board[5, 0] = 2
    placed, marked, final = clear_keyframes(board, [2], [6])
    assert np.array_equal(placed, board)
    assert (marked[2, :] < 0).all()
    assert (marked[:, 6] < 0).all()
    assert marked[2, 6] == -4
    assert marked[5, 0] == 2
    assert not final[2, :].any() and not final[:, 6].any()
    assert final[5, 0] == 2


def test_clear_frames_do_not_modify_input():
    board = np.ones((8, 8), dtype=np.int8)
    clear_keyframes(board, [0], [])
    assert board.all() and (board > 0).all()


def test_explosion_marks_every_occupied_cell():
    board = np.zeros((8, 8), dtype=np.int8)
    board[0, 0] = 3
    board[4, 4] = 6
    start, marked, end = explosion_keyframes(board)
    assert np.array_equal(start, board)
    assert marked[0, 0] == -3 and marked[4, 4] == -6
    assert np.count_nonzero(marked) == 2
    assert not end.any()


def test_changed_cells_lists_differences():
    before = np.zeros((8, 8), dtype=np.int8)
    after = before.copy()
    after[1, 2] = 5
    after[7, 0] = 1
    assert changed_cells(before, after) == [(1, 2), (7, 0)]
