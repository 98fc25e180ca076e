"""Pygame window viewer for the neighborhood animation.

An alternative to the terminal: frames are drawn into the same character
canvas, then painted into a Pygame window with one colour per shape kind.
Closing the window (or pressing ESC) flags the viewer as closed, which the
engine polls as its stop hook.
"""

from __future__ import annotations

from typing import ClassVar

import pygame

from neighborhood.ui.terminal import Buffer

# Colour palette
_BG = (18, 18, 24)
_NEUTRAL = (150, 150, 160)


class PygameViewer:
    """Owns the Pygame window shared by every frame's buffer.

    Attributes:
        font_size: Point size of the monospace font.
        closed: True once the user has closed the window.
    """

    # Glyph characters coloured by the shape that uses them
    _COLOURS: ClassVar[dict[str, tuple[int, int, int]]] = {
        "/": (255, 140, 0),
        "\\": (255, 140, 0),
        "+": (0, 192, 255),
        "-": (0, 192, 255),
        "|": (0, 192, 255),
    }

    def __init__(self, font_size: int = 14, caption: str = "Neighborhood") -> None:
        """Initialise Pygame and load the font.

        Args:
            font_size: Point size of the monospace font.
            caption: Window title.
        """
        self.font_size = font_size
        self.closed = False
        pygame.init()
        pygame.display.set_caption(caption)
        self.font = pygame.font.SysFont("monospace", font_size)
        self.char_w, self.char_h = self.font.size("M")
        self.screen: pygame.Surface | None = None
        self._glyph_cache: dict[str, pygame.Surface] = {}

    def buffer(self, width: int, height: int) -> PygameBuffer:
        """Build a render target for one frame (used as a buffer factory)."""
        if self.screen is None:
            self.screen = pygame.display.set_mode(
                (width * self.char_w, height * self.char_h),
            )
        return PygameBuffer(width, height, viewer=self)

    def should_stop(self) -> bool:
        """Stop hook for the animation loop."""
        self._handle_events()
        return self.closed

    def close(self) -> None:
        """Shut Pygame down."""
        self.closed = True
        pygame.quit()

    def _handle_events(self) -> None:
        """Process Pygame input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT or (
                event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE
            ):
                self.closed = True

    def _glyph(self, ch: str) -> pygame.Surface:
        surf = self._glyph_cache.get(ch)
        if surf is None:
            surf = self.font.render(ch, True, self._COLOURS.get(ch, _NEUTRAL))
            self._glyph_cache[ch] = surf
        return surf

    def paint(self, buffer: Buffer) -> None:
        """Draw a finished canvas into the window."""
        if self.screen is None or self.closed:
            return
        self.screen.fill(_BG)
        for y, row in enumerate(buffer.canvas):
            for x, ch in enumerate(row):
                if ch != " ":
                    self.screen.blit(
                        self._glyph(str(ch)),
                        (x * self.char_w, y * self.char_h),
                    )
        pygame.display.flip()
        self._handle_events()


class PygameBuffer(Buffer):
    """A character canvas whose ``flush`` paints into a Pygame window."""

    def __init__(self, width: int, height: int, viewer: PygameViewer) -> None:
        super().__init__(width, height, clear_screen=False)
        self.viewer = viewer

    def flush(self) -> None:
        """Paint the canvas into the viewer's window."""
        self.viewer.paint(self)
