from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np
import pygame

from block_blast.game import BOARD_SIZE, Piece

from .palette import BACKGROUND, color_for_value


class Renderer:
    def __init__(self, cell_size: int = 48, margin: int = 24, tray_cell_size: int = 28) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.tray_cell_size = tray_cell_size
        self.header = 40

    @property
    def board_origin(self) -> Tuple[int, int]:
        return self.margin, self.margin + self.header

    @property
    def window_size(self) -> Tuple[int, int]:
        board_px = BOARD_SIZE * self.cell_size
        width = self.margin * 2 + board_px
        height = self.header + self.margin * 3 + board_px + 3 * self.tray_cell_size + 8
        return width, height

    def cell_at(self, pos: Tuple[int, int]) -> Optional[Tuple[int, int]]:
        """Board (row, col) under a pixel position, or None off the board."""
        x0, y0 = self.board_origin
        col = (pos[0] - x0) // self.cell_size
        row = (pos[1] - y0) // self.cell_size
        if 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE:
            return int(row), int(col)
        return None

    def tray_slot_rect(self, slot: int, slots: int = 3) -> pygame.Rect:
        width, _ = self.window_size
        slot_w = (width - self.margin * 2) // slots
        x0, y0 = self.board_origin
        top = y0 + BOARD_SIZE * self.cell_size + self.margin
        return pygame.Rect(self.margin + slot * slot_w, top, slot_w, 3 * self.tray_cell_size + 8)

    def slot_at(self, pos: Tuple[int, int], pieces: Sequence[Optional[Piece]]) -> Optional[int]:
        """Tray slot holding a piece under a pixel position, laid out like `draw_tray`."""
        for slot, piece in enumerate(pieces):
            if piece is not None and self.tray_slot_rect(slot, len(pieces)).collidepoint(pos):
                return slot
        return None

    def draw_board(self, screen: pygame.Surface, board: np.ndarray) -> None:
        x0, y0 = self.board_origin
        for y in range(BOARD_SIZE):
            for x in range(BOARD_SIZE):
                rect = pygame.Rect(x0 + x * self.cell_size, y0 + y * self.cell_size,
                                   self.cell_size - 2, self.cell_size - 2)
                pygame.draw.rect(screen, color_for_value(int(board[y, x])), rect, border_radius=4)

    def draw_ghost(self, screen: pygame.Surface, piece: Piece, row: int, col: int) -> None:
        x0, y0 = self.board_origin
        color = color_for_value(-piece.color)
        for i, j in piece.cells():
            rect = pygame.Rect(x0 + (col + j) * self.cell_size, y0 + (row + i) * self.cell_size,
                               self.cell_size - 2, self.cell_size - 2)
            pygame.draw.rect(screen, color, rect, 3, border_radius=4)

    def draw_piece(self, screen: pygame.Surface, piece: Piece, top_left: Tuple[int, int], cell_size: int) -> None:
        color = color_for_value(piece.color)
        for i, j in piece.cells():
            rect = pygame.Rect(top_left[0] + j * cell_size, top_left[1] + i * cell_size, cell_size - 2, cell_size - 2)
            pygame.draw.rect(screen, color, rect, border_radius=3)

    def draw_tray(self, screen: pygame.Surface, pieces: Sequence[Optional[Piece]], hidden: Optional[int] = None) -> None:
        for slot, piece in enumerate(pieces):
            if piece is None or slot == hidden:
                continue
            rect = self.tray_slot_rect(slot, len(pieces))
            w = piece.cols * self.tray_cell_size
            h = piece.rows * self.tray_cell_size
            self.draw_piece(screen, piece, (rect.centerx - w // 2, rect.centery - h // 2), self.tray_cell_size)

    def draw_header(self, screen: pygame.Surface, font: pygame.font.Font, text: str,
                    color: Tuple[int, int, int] = (230, 230, 230)) -> None:
        img = font.render(text, True, color)
        screen.blit(img, (self.margin, self.margin // 2))

    def clear(self, screen: pygame.Surface) -> None:
        screen.fill(BACKGROUND)
