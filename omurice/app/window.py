"""pygame frontend.

Presents the program's visible RenderSurface and routes input to it:
    - Header with the localized title, footer with the scene's buttons
    - Canvas centered in the area between them; its on-screen bounds are
      written back to the surface so pointer coordinates normalize correctly
    - About scene dims the canvas and shows the about text on top
    - A ketchup bottle follows the pointer, spraying while a stroke is drawn

The window runs on the same asyncio loop as the program's subscriptions, so
event handling, growth ticks and presentation never interleave mid-update.

Keys:
    Esc   quit
    R     another one (game scene)
    S     download (game scene)
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

import pygame

from omurice.app.input import InputAdapter
from omurice.app.program import OmuriceProgram
from omurice.app.scenes import Scene
from omurice.simulator.surface import RenderSurface
from omurice.utils.validators import WindowConfig

logger = logging.getLogger(__name__)

BG_COLOR = (255, 236, 240)
TEXT_COLOR = (74, 44, 42)
MUTED_TEXT = (140, 104, 100)
BTN_BG = (255, 255, 255)
BTN_BG_HOVER = (255, 214, 222)
BTN_BORDER = (232, 150, 160)
KETCHUP = (251, 90, 89)
BOTTLE_CAP = (250, 250, 245)

FONT_NAMES = "notosanscjkjp,notosansjp,notosanscjk,hiraginosans,yugothic,msgothic,arialunicodems,arial"
ABOUT_CANVAS_ALPHA = 26
TOAST_MS = 2000


@dataclass
class Button:
    rect: pygame.Rect
    label: str
    action: Callable[[], object]
    caption: Optional[str] = None

    def draw(self, surf: pygame.Surface, font: pygame.font.Font, hover: bool) -> None:
        pygame.draw.rect(surf, BTN_BG_HOVER if hover else BTN_BG, self.rect, border_radius=10)
        pygame.draw.rect(surf, BTN_BORDER, self.rect, width=2, border_radius=10)
        text = font.render(self.label, True, TEXT_COLOR)
        surf.blit(text, text.get_rect(center=self.rect.center))

    def contains(self, pos: Tuple[int, int]) -> bool:
        return self.rect.collidepoint(pos)


def wrap_text(text: str, font: pygame.font.Font, width: int) -> List[str]:
    """Greedy word wrap; text without spaces (Japanese) wraps per character."""
    sep = " " if " " in text else ""
    tokens = text.split(" ") if sep else list(text)
    lines: List[str] = []
    line = ""
    for token in tokens:
        candidate = f"{line}{sep}{token}" if line else token
        if font.size(candidate)[0] <= width or not line:
            line = candidate
        else:
            lines.append(line)
            line = token
    if line:
        lines.append(line)
    return lines


class OmuriceWindow:
    """Resizable pygame window hosting an OmuriceProgram.

    Parameters
    ----------
    program : OmuriceProgram
        Application state; the window attaches the visible canvas to it
    cfg : WindowConfig
        Initial size and layout
    """

    def __init__(self, program: OmuriceProgram, cfg: WindowConfig) -> None:
        self.program = program
        self.cfg = cfg
        pygame.init()
        self.screen = pygame.display.set_mode((cfg.width, cfg.height), pygame.RESIZABLE)
        self.title_font = pygame.font.SysFont(FONT_NAMES, 34, bold=True)
        self.font = pygame.font.SysFont(FONT_NAMES, 20)
        self.small_font = pygame.font.SysFont(FONT_NAMES, 16)
        self.input = InputAdapter()
        self.canvas = RenderSurface(0, program.cfg.canvas.scale, program.cfg.canvas.background)
        program.attach_canvas(self.canvas)
        self.buttons: List[Button] = []
        self._toast: Optional[str] = None
        self._toast_until = 0
        self._running = False
        self._refresh_caption()

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def main_area(self) -> pygame.Rect:
        w, h = self.screen.get_size()
        top = self.cfg.header_height
        return pygame.Rect(0, top, w, max(0, h - top - self.cfg.footer_height))

    def main_area_size(self) -> Tuple[int, int]:
        area = self.main_area()
        return (area.width, area.height)

    def _place_canvas(self) -> pygame.Rect:
        area = self.main_area()
        size = self.canvas.display_size
        rect = pygame.Rect(0, 0, size, size)
        rect.center = area.center
        self.canvas.move_to(rect.left, rect.top)
        return rect

    def _layout_buttons(self) -> None:
        content = self.program.content
        scene = self.program.scene
        if scene is Scene.HOME:
            specs = [
                (content.start_game_button, self.program.start_game),
                (content.about_game_button, self.program.open_about),
                (self.program.content.language_name, self._toggle_locale),
            ]
        elif scene is Scene.ABOUT:
            specs = [(content.return_to_home_button, self.program.return_home)]
        else:
            specs = [
                (content.another_one_button, self.program.reset),
                (content.download_button, self._download),
                (content.return_to_home_button, self.program.return_home),
            ]

        w, h = self.screen.get_size()
        widths = [max(140, self.font.size(label)[0] + 32) for label, _ in specs]
        gap = 14
        x = (w - (sum(widths) + gap * (len(widths) - 1))) // 2
        y = h - self.cfg.footer_height + (self.cfg.footer_height - 44) // 2
        self.buttons = []
        for (label, action), bw in zip(specs, widths):
            self.buttons.append(Button(pygame.Rect(x, y, bw, 44), label, action))
            x += bw + gap
        if scene is Scene.HOME:
            self.buttons[-1].caption = content.select_language_button

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def _toggle_locale(self) -> None:
        self.program.toggle_locale()
        self._refresh_caption()

    def _download(self) -> None:
        path = self.program.download()
        if path is not None:
            self._show_toast(path.name)

    def _show_toast(self, text: str) -> None:
        self._toast = text
        self._toast_until = pygame.time.get_ticks() + TOAST_MS

    def _refresh_caption(self) -> None:
        pygame.display.set_caption(self.program.content.title)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self._running = False
            return
        if event.type == pygame.KEYDOWN:
            self._handle_key(event.key)
            return
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            for button in self.buttons:
                if button.contains(event.pos):
                    button.action()
                    self._refresh_caption()
                    return

        pointer = self.input.translate(event, self.screen.get_size())
        if pointer is not None:
            self.program.handle_pointer(pointer)

    def _handle_key(self, key: int) -> None:
        if key == pygame.K_ESCAPE:
            self._running = False
        elif key == pygame.K_r:
            self.program.reset()
        elif key == pygame.K_s and self.program.scene is Scene.GAME:
            self._download()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> None:
        self.screen.fill(BG_COLOR)
        self._layout_buttons()
        content = self.program.content
        scene = self.program.scene

        w, _ = self.screen.get_size()
        title = self.title_font.render(content.title, True, TEXT_COLOR)
        self.screen.blit(title, title.get_rect(center=(w // 2, self.cfg.header_height // 2)))

        canvas_rect = self._place_canvas()
        if self.canvas.is_ready:
            image = self._canvas_image(canvas_rect.size)
            if scene is Scene.ABOUT:
                image.set_alpha(ABOUT_CANVAS_ALPHA)
            self.screen.blit(image, canvas_rect)

        if scene is Scene.HOME:
            desc = self.font.render(content.description, True, MUTED_TEXT)
            self.screen.blit(desc, desc.get_rect(midtop=(w // 2, self.cfg.header_height - 8)))
        elif scene is Scene.ABOUT:
            self._render_about(canvas_rect)

        mouse = pygame.mouse.get_pos()
        for button in self.buttons:
            button.draw(self.screen, self.font, button.contains(mouse))
            if button.caption:
                caption = self.small_font.render(button.caption, True, MUTED_TEXT)
                self.screen.blit(caption, caption.get_rect(midbottom=(button.rect.centerx, button.rect.top - 2)))

        if scene is Scene.GAME:
            self._render_bottle(self.program.cursor)

        if self._toast and pygame.time.get_ticks() < self._toast_until:
            toast = self.small_font.render(self._toast, True, TEXT_COLOR)
            self.screen.blit(toast, toast.get_rect(midbottom=(w // 2, self.main_area().bottom - 6)))

    def _canvas_image(self, size: Tuple[int, int]) -> pygame.Surface:
        n = self.canvas.pixel_size
        raw = pygame.image.frombuffer(self.canvas.pixels.tobytes(), (n, n), "RGB")
        return pygame.transform.smoothscale(raw, size)

    def _render_about(self, canvas_rect: pygame.Rect) -> None:
        content = self.program.content
        area = self.main_area().inflate(-80, -40)
        y = area.top
        heading = self.title_font.render(content.about_heading, True, TEXT_COLOR)
        self.screen.blit(heading, (area.left, y))
        y += heading.get_height() + 16
        for paragraph in content.about_paragraphs:
            for line in wrap_text(paragraph, self.font, area.width):
                rendered = self.font.render(line, True, TEXT_COLOR)
                self.screen.blit(rendered, (area.left, y))
                y += rendered.get_height() + 4
            y += 12
        credit = self.small_font.render(content.credit, True, MUTED_TEXT)
        self.screen.blit(credit, (area.left, y))

    def _render_bottle(self, cursor: Tuple[float, float]) -> None:
        x, y = int(cursor[0]), int(cursor[1])
        nozzle = [(x, y - 4), (x - 6, y - 22), (x + 6, y - 22)]
        pygame.draw.polygon(self.screen, BOTTLE_CAP, nozzle)
        pygame.draw.rect(self.screen, BOTTLE_CAP, pygame.Rect(x - 10, y - 34, 20, 14), border_radius=3)
        body = pygame.Rect(x - 18, y - 104, 36, 72)
        pygame.draw.rect(self.screen, KETCHUP, body, border_radius=12)
        pygame.draw.rect(self.screen, BOTTLE_CAP, body.inflate(-14, -46), border_radius=4)
        if self.program.is_drawing:
            # spray flips side every 100 ms
            side = 1 if (pygame.time.get_ticks() // 100) % 2 else -1
            for i in range(3):
                pygame.draw.circle(self.screen, KETCHUP, (x + side * (i + 1) * 3, y + i * 2), 2)

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    async def run(self) -> None:
        """Pump events and present frames until the window closes."""
        self._running = True
        self.program.start(self.main_area_size)
        period = 1.0 / self.program.cfg.clock.fps
        try:
            while self._running:
                for event in pygame.event.get():
                    self.handle_event(event)
                self.render()
                pygame.display.flip()
                await asyncio.sleep(period)
        finally:
            self.program.stop()
            self.program.detach_canvas()
            pygame.quit()
            logger.info("Window closed")
