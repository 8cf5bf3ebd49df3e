"""Window showing the colours of the pixels the workers send back."""

from __future__ import annotations

import logging
import queue
from typing import Iterable

from .colors import color_palette
from .desc import PixelIntensity

logger = logging.getLogger(__name__)

_FRAME_RATE = 60


def intensities_to_colors(intensities: Iterable[PixelIntensity]) -> list[tuple[int, int, int]]:
    """Map each pixel's normalised count to an RGB colour."""
    return [color_palette(pixel.count) for pixel in intensities]


def fill_frame(frame: bytearray | memoryview, colors: list[tuple[int, int, int]]) -> None:
    """Paint an RGBA frame in place, repeating colors over the whole frame."""
    if not colors:
        raise ValueError("no colours to draw")
    for index in range(len(frame) // 4):
        red, green, blue = colors[index % len(colors)]
        frame[index * 4 : index * 4 + 4] = bytes((red, green, blue, 0xFF))


class DisplayFractal:
    """A window of fixed size refreshed with incoming pixel intensities."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def start(self, source: queue.Queue) -> None:
        """Show the window until it is closed, drawing each batch taken from source."""
        import pygame

        pygame.init()
        try:
            size = (self.width, self.height)
            screen = pygame.display.set_mode(size)
            pygame.display.set_caption("Fractal")
            frame = bytearray(self.width * self.height * 4)
            clock = pygame.time.Clock()
            running = True
            while running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                try:
                    intensities = source.get_nowait()
                except queue.Empty:
                    pass
                else:
                    colors = intensities_to_colors(intensities)
                    if colors:
                        fill_frame(frame, colors)
                    else:
                        logger.warning("Received an empty batch of pixels")
                image = pygame.image.frombuffer(bytes(frame), size, "RGBA")
                screen.blit(image, (0, 0))
                pygame.display.flip()
                clock.tick(_FRAME_RATE)
        finally:
            pygame.quit()