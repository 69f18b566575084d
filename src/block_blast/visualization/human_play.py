from __future__ import annotations

import argparse
import logging
from collections import deque
from typing import Deque, Optional, Tuple

import numpy as np
import pygame

from block_blast.game import BlockBlastGame, GameConfig, can_place
from block_blast.game.frames import explosion_keyframes

from .renderer import Renderer


logger = logging.getLogger(__name__)

FRAME_MS = 140


class Playback:
    """Queue of keyframe boards shown on the frontend's own clock."""

    def __init__(self) -> None:
        self.frames: Deque[np.ndarray] = deque()
        self._shown_at = 0

    def push(self, frames) -> None:
        self.frames.extend(frames)

    @property
    def busy(self) -> bool:
        return len(self.frames) > 0

    def current(self, now: int) -> Optional[np.ndarray]:
        if not self.frames:
            return None
        if self._shown_at == 0:
            self._shown_at = now
        elif now - self._shown_at >= FRAME_MS:
            self.frames.popleft()
            self._shown_at = now if self.frames else 0
        return self.frames[0] if self.frames else None


def drop_origin(game: BlockBlastGame, slot: int, cell: Tuple[int, int]) -> Optional[Tuple[int, int]]:
    """Board origin for dropping `slot` with its first filled cell on `cell`."""
    piece = game.pieces[slot]
    if piece is None:
        return None
    top, left = piece.anchor_offset()
    return cell[0] - top, cell[1] - left


def run(seed: Optional[int] = None) -> None:
    pygame.init()
    try:
        game = BlockBlastGame(GameConfig(random_seed=seed))
        renderer = Renderer()
        screen = pygame.display.set_mode(renderer.window_size)
        pygame.display.set_caption("Block Blast")
        font = pygame.font.SysFont(None, 30)
        clock = pygame.time.Clock()
        playback = Playback()

        dragging: Optional[int] = None
        pending_reset = False

        running = True
        while running:
            now = pygame.time.get_ticks()
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_n:
                        game.reset()
                        playback.frames.clear()
                        pending_reset = False
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and not playback.busy:
                    dragging = renderer.slot_at(event.pos, game.pieces)
                elif event.type == pygame.MOUSEBUTTONUP and event.button == 1 and dragging is not None:
                    cell = renderer.cell_at(event.pos)
                    # Released off the board: the gesture is cancelled
                    origin = drop_origin(game, dragging, cell) if cell is not None else None
                    if origin is not None:
                        outcome = game.place_piece(dragging, *origin)
                        if outcome.success:
                            playback.push(outcome.keyframes()[:-1])
                            if outcome.lines_cleared:
                                logger.info("cleared %d line(s), score %d", outcome.lines_cleared, game.score)
                            if outcome.game_over:
                                playback.push(explosion_keyframes(game.board))
                                pending_reset = True
                    dragging = None

            if pending_reset and not playback.busy:
                logger.info("game over with score %d", game.score)
                game.reset()
                pending_reset = False

            renderer.clear(screen)
            frame = playback.current(now)
            renderer.draw_board(screen, frame if frame is not None else game.board)
            renderer.draw_tray(screen, game.pieces, hidden=dragging)

            if dragging is not None:
                piece = game.pieces[dragging]
                mx, my = pygame.mouse.get_pos()
                cell = renderer.cell_at((mx, my))
                origin = drop_origin(game, dragging, cell) if cell is not None else None
                if origin is not None and can_place(game.board, origin[0], origin[1], piece):
                    renderer.draw_ghost(screen, piece, origin[0], origin[1])
                if piece is not None:
                    top, left = piece.anchor_offset()
                    size = renderer.tray_cell_size
                    renderer.draw_piece(screen, piece, (mx - left * size - size // 2, my - top * size - size // 2), size)

            header = f"Score: {game.score}   Best: {game.best_score}"
            if pending_reset:
                renderer.draw_header(screen, font, "Game Over", (255, 100, 100))
            else:
                renderer.draw_header(screen, font, header)

            pygame.display.flip()
            clock.tick(60)
    finally:
        pygame.quit()


def main() -> None:  # pragma: no cover
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run(args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
