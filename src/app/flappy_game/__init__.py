"""
32x32 Flappy Bird simulation:
- FlappyGameConfig: load .env config
- FlappyBirdGame: bird physics, tube scrolling, scoring and collisions
- PreviewWindow: pixel-scaled OpenCV view of the running game
"""

from .config import FlappyGameConfig
from .game import FlappyBirdGame, Tube
from .canvas import PreviewWindow, render_frame, scale_frame

__all__ = [
    "FlappyGameConfig", "FlappyBirdGame", "Tube",
    "PreviewWindow", "render_frame", "scale_frame",
]
