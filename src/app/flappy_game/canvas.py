"""Pixel rendering of the 32x32 game and the scaled OpenCV preview window."""
from __future__ import annotations

import logging
from typing import Optional

import cv2
import numpy as np

from .game import (
    BIRD_HEIGHT, BIRD_WIDTH, BIRD_X, HEIGHT, TUBE_WIDTH, WIDTH, FlappyBirdGame,
)

logger = logging.getLogger(__name__)

# BGR
SKY = (230, 200, 120)
GROUND = (60, 150, 210)
TUBE = (40, 170, 60)
BIRD = (40, 220, 250)


def render_frame(game: FlappyBirdGame) -> np.ndarray:
    """Draw the current game state as a 32x32 BGR image."""
    frame = np.empty((HEIGHT, WIDTH, 3), dtype=np.uint8)
    frame[:, :] = SKY
    frame[HEIGHT - 1, :] = GROUND

    for tube in game.tubes:
        x0, x1 = max(0, tube.x), min(WIDTH, tube.x + TUBE_WIDTH)
        if x1 <= x0:
            continue
        for rows in tube.solid_rows():
            y0, y1 = max(0, rows.start), min(HEIGHT, rows.stop)
            if y1 > y0:
                frame[y0:y1, x0:x1] = TUBE

    y0, y1 = max(0, game.bird_y), min(HEIGHT, game.bird_y + BIRD_HEIGHT)
    frame[y0:y1, BIRD_X:BIRD_X + BIRD_WIDTH] = BIRD
    return frame


def scale_frame(frame: np.ndarray, scale: int) -> np.ndarray:
    """Blow every game pixel up to a scale x scale block."""
    h, w = frame.shape[:2]
    return cv2.resize(frame, (w * scale, h * scale), interpolation=cv2.INTER_NEAREST)


class PreviewWindow:
    """OpenCV window showing the scaled game with a one-line HUD."""
    def __init__(self, scale: int, win_name: str = "Flappy Bird Q-learning"):
        self.scale = max(1, int(scale))
        self.win_name = win_name
        self._inited = False

    def show(self, game: FlappyBirdGame, hud: Optional[str] = None, wait_ms: int = 1) -> int:
        """Draw the frame and wait up to wait_ms for a key. Returns the key code or -1."""
        img = scale_frame(render_frame(game), self.scale)
        if hud:
            cv2.putText(img, hud, (6, 14), cv2.FONT_HERSHEY_SIMPLEX, 0.4, (255, 255, 255), 1, cv2.LINE_AA)
        if not self._inited:
            cv2.namedWindow(self.win_name, cv2.WINDOW_AUTOSIZE)
            self._inited = True
        cv2.imshow(self.win_name, img)
        return cv2.waitKey(max(1, int(wait_ms)))

    def close(self) -> None:
        try:
            cv2.destroyAllWindows()
        except cv2.error as e:
            logger.debug("Ignoring error closing preview: %s", e)
        self._inited = False
