# pathviz/app/viewer.py
#!/usr/bin/env python3
"""
Pathfinding Visualizer: grid editor + paced search playback

- Mouse:
    left click        -> place start, then end (alternating)
    right click/drag  -> toggle walls
- Keyboard:
    [SPACE]      -> visualize with the selected algorithm
    [1]-[4]      -> select BFS / DFS / Dijkstra / A*
    [G]          -> generate random maze
    [X]          -> clear path (keeps walls, start, end)
    [C]          -> clear grid
    [+]/[-]      -> faster / slower (delay per step)
    [Q]/[ESC]    -> quit

Settings: --rows=, --cols=, --delay-ms=, --wall-probability=, --algorithm=
or the matching PATHVIZ_* environment variables.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Set, Tuple

import pygame

from pathviz.app.editor import GridEditor
from pathviz.config import (
    Settings, load_settings, DELAY_MS_MIN, DELAY_MS_MAX, DELAY_MS_STEP,
)
from pathviz.core.errors import ConfigError, InvalidSelection
from pathviz.core.grid import GridModel
from pathviz.core.runner import AlgorithmRunner
from pathviz.core.types import (
    Cell, RunOutcome, EMPTY, WALL, START, END, VISITED, PATH,
    FOUND, NOT_FOUND, INVALID_INPUT, CANCELLED,
)

logger = logging.getLogger(__name__)

# ---------- Config ----------
PANEL_W = 360            # right band: metrics + buttons
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 28
FPS = 60
FONT_NAME = None  # default pygame font

ALGO_LABELS = {
    "bfs": "BFS",
    "dfs": "DFS",
    "dijkstra": "Dijkstra",
    "astar": "A*",
}
ALGO_KEYS = {
    pygame.K_1: "bfs",
    pygame.K_2: "dfs",
    pygame.K_3: "dijkstra",
    pygame.K_4: "astar",
}

# Colors
WHITE       = (255,255,255)
BLACK       = (  0,  0,  0)
WALL_GRAY   = ( 40, 44, 52)
EMPTY_GRAY  = (200,200,200)
START_GREEN = ( 46,139, 87)
END_RED     = (220, 50, 47)
NEON_CYAN   = (  0,150,255)
NEON_MINT   = (  0,255,200)

CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)

KIND_COLORS = {EMPTY: EMPTY_GRAY, WALL: WALL_GRAY, START: START_GREEN, END: END_RED}
MARK_COLORS = {VISITED: NEON_CYAN, PATH: NEON_MINT}

STATE_LABELS = {
    FOUND: "Path found",
    NOT_FOUND: "No path",
    INVALID_INPUT: "Select a start and an end",
    CANCELLED: "Cancelled",
}

# ---------- Panel buttons ----------
BUTTON_FILL = {
    "idle":     (36, 40, 48, 220),
    "hover":    (46, 50, 60, 230),
    "selected": (58, 86, 160, 235),
}
BUTTON_OUTLINE = (120, 170, 255)
BUTTON_TEXT    = (235, 238, 242)


@dataclass
class PanelButton:
    label: str
    rect: pygame.Rect
    on_click: Callable[[], None]
    selectable: bool = False
    selected: bool = False
    hover: bool = False

    @property
    def look(self) -> str:
        if self.selectable and self.selected:
            return "selected"
        return "hover" if self.hover else "idle"

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        fill = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        pygame.draw.rect(fill, BUTTON_FILL[self.look], fill.get_rect(), border_radius=10)
        screen.blit(fill, self.rect.topleft)
        if self.look == "selected":
            pygame.draw.rect(screen, BUTTON_OUTLINE, self.rect, width=2, border_radius=10)
        text = font.render(self.label, True, BUTTON_TEXT)
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        """True if the event was a left click on this button (the callback has run)."""
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
            return False
        clicked = bool(event.type == pygame.MOUSEBUTTONDOWN and event.button == 1
                   and self.rect.collidepoint(event.pos))
        if clicked:
            self.on_click()
        return clicked


def state_after_run(outcome: str, state: str) -> str:
    """Panel state once visualize() returns.

    found / not_found were already shown through the RunOutcome event. A cancelled
    run only reports itself while the panel still says "Running"; otherwise the
    action that cancelled it (clear, maze, ...) has set the state and keeps it.
    """
    if outcome == INVALID_INPUT:
        return STATE_LABELS[INVALID_INPUT]
    if outcome == CANCELLED and state == "Running":
        return STATE_LABELS[CANCELLED]
    return state

# ---------- Viewer ----------
class Viewer:
    def __init__(self, settings: Settings):
        pygame.init()

        self.settings = settings
        self.grid = GridModel(settings.rows, settings.cols)
        self.editor = GridEditor(self.grid)
        self.runner = AlgorithmRunner(self.grid, observer=self._on_event,
                                      delay_ms=settings.delay_ms)

        self.font_small = pygame.font.Font(FONT_NAME, 14)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        self.cell_size = self._auto_cell_size()
        win_w = GRID_MARGIN*2 + self.grid.cols * self.cell_size + PANEL_W
        win_h = max(GRID_MARGIN*2 + self.grid.rows * self.cell_size, 560)
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Pathfinding Visualizer")

        self._buttons: List[PanelButton] = []
        self._layout(win_w, win_h)

        self.selected_algo = settings.algorithm
        self.state = "Idle"
        self._alive = True
        self._tasks: Set[asyncio.Task] = set()
        # right-drag wall painting: target kind + cells already painted in this drag
        self._paint_kind: Optional[str] = None
        self._painted: Set[Cell] = set()
        self._refresh_active_states()

    # ---------- layout ----------
    def _auto_cell_size(self) -> int:
        target_h = 720 - GRID_MARGIN*2
        return max(8, min(CELL_SIZE_DEFAULT, target_h // self.grid.rows))

    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits the window; grid on the left, panel on the right."""
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = int(max(8, min(avail_w // self.grid.cols, avail_h // self.grid.rows)))

        grid_w = self.grid.cols * self.cell_size
        grid_h = self.grid.rows * self.cell_size
        top_y = max(0, (win_h - grid_h) // 2)
        self._grid_origin = (GRID_MARGIN, top_y)
        self._grid_rect = pygame.Rect(GRID_MARGIN, top_y, grid_w, grid_h)
        self._right_band = pygame.Rect(self._grid_rect.right + GRID_MARGIN, 0,
                                       max(PANEL_W, win_w - self._grid_rect.right - GRID_MARGIN),
                                       win_h)
        self._build_buttons()

    def _cell_at(self, pos: Tuple[int, int]) -> Optional[Cell]:
        if not self._grid_rect.collidepoint(pos):
            return None
        ox, oy = self._grid_origin
        col = (pos[0] - ox) // self.cell_size
        row = (pos[1] - oy) // self.cell_size
        cell = (row, col)
        return cell if self.grid.in_bounds(cell) else None

    # ---------- main loop ----------
    async def run(self):
        while self._alive:
            self._handle_events()
            self._draw()
            await asyncio.sleep(1.0 / FPS)
        await self.runner.stop()
        pygame.quit()

    def _spawn(self, coro):
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    # ---------- runner glue ----------
    def _on_event(self, event):
        if isinstance(event, RunOutcome):
            self.state = STATE_LABELS[event.outcome]
        else:
            self.grid.record(event)

    async def _visualize(self):
        await self.runner.stop()
        self.editor.clear_path()
        self.state = "Running"
        self._refresh_active_states()
        outcome = await self.runner.visualize(self.selected_algo)
        self.state = state_after_run(outcome, self.state)
        self._refresh_active_states()

    def _start_visualize(self):
        self._spawn(self._visualize())

    def _generate_maze(self):
        self.runner.cancel()
        self.editor.generate_maze(self.settings.wall_probability)
        self.state = "Idle"

    def _clear_grid(self):
        self.runner.cancel()
        self.editor.clear()
        self.state = "Idle"

    def _clear_path(self):
        self.runner.cancel()
        self.editor.clear_path()
        self.state = "Idle"

    def _switch_algo(self, key: str):
        self.selected_algo = key
        self._refresh_active_states()

    def _bump_delay(self, dv: int):
        self.runner.delay_ms = int(max(DELAY_MS_MIN, min(DELAY_MS_MAX, self.runner.delay_ms + dv)))

    # ---------- input ----------
    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                self._quit()
            elif e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_ESCAPE, pygame.K_q):
                    self._quit()
                elif e.key == pygame.K_SPACE:
                    self._start_visualize()
                elif e.key == pygame.K_g:
                    self._generate_maze()
                elif e.key == pygame.K_x:
                    self._clear_path()
                elif e.key == pygame.K_c:
                    self._clear_grid()
                elif e.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self._bump_delay(-DELAY_MS_STEP)
                elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
                    self._bump_delay(+DELAY_MS_STEP)
                elif e.key in ALGO_KEYS:
                    self._switch_algo(ALGO_KEYS[e.key])
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((e.w, e.h), pygame.RESIZABLE)
                self._layout(e.w, e.h)
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
                if any(b.handle_mouse(e) for b in self._buttons):
                    continue
                self._handle_grid_mouse(e)

    def _handle_grid_mouse(self, e: pygame.event.Event):
        if e.type == pygame.MOUSEBUTTONUP:
            self._paint_kind = None
            self._painted.clear()
            return
        cell = self._cell_at(e.pos)
        if cell is None:
            return
        if self.runner.running:
            logger.debug(f"Ignoring edit of {cell} while a run is active")
            return
        if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
            self.editor.click(cell)
        elif e.type == pygame.MOUSEBUTTONDOWN and e.button == 3:
            self._paint_kind = EMPTY if self.grid.is_wall(cell) else WALL
            self._painted.clear()
            self._paint(cell)
        elif e.type == pygame.MOUSEMOTION and self._paint_kind is not None:
            self._paint(cell)

    def _paint(self, cell: Cell):
        if cell in self._painted or self.grid.kind(cell) == self._paint_kind:
            return
        self._painted.add(cell)
        try:
            self.editor.toggle_wall(cell)
        except InvalidSelection as ex:
            logger.info(f"Rejected: {ex}")

    def _quit(self):
        self.runner.cancel()
        self._alive = False

    # ---------- drawing ----------
    def _draw(self):
        self.screen.fill((24, 26, 32))
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _draw_grid(self):
        cs = self.cell_size
        ox, oy = self._grid_origin
        marks = self.grid.marks
        for row in range(self.grid.rows):
            for col in range(self.grid.cols):
                rect = pygame.Rect(ox + col*cs, oy + row*cs, cs, cs)
                kind = self.grid.cells[row][col]
                color = KIND_COLORS[kind]
                # start/end keep their look for the whole run
                if kind == EMPTY and (row, col) in marks:
                    color = MARK_COLORS[marks[(row, col)]]
                pygame.draw.rect(self.screen, color, rect)
                pygame.draw.rect(self.screen, BLACK, rect, 1)

        for cell, label in ((self.grid.start, "S"), (self.grid.end, "E")):
            if cell is None:
                continue
            row, col = cell
            txt = self.font_small.render(label, True, WHITE)
            self.screen.blit(txt, txt.get_rect(center=(ox + col*cs + cs//2, oy + row*cs + cs//2)))

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 230  # leaves space for metrics card above
        w = max(160, rb.width - 32)
        h = 34
        gap = 8

        def add(label, cb, *, selectable=False, store_as: Optional[str] = None):
            rect = pygame.Rect(x, y, w, h)
            btn = PanelButton(label, rect, cb, selectable=selectable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        add("Visualize", self._start_visualize, selectable=True, store_as="btn_run"); y += h + gap
        add("Generate Maze", self._generate_maze); y += h + gap
        add("Clear Path", self._clear_path);       y += h + gap
        add("Clear Grid", self._clear_grid);       y += h + gap

        half = (w - 8) // 2
        self._buttons.append(PanelButton("Slower", pygame.Rect(x, y, half, h),
                                      lambda: self._bump_delay(+DELAY_MS_STEP)))
        self._buttons.append(PanelButton("Faster", pygame.Rect(x + half + 8, y, half, h),
                                      lambda: self._bump_delay(-DELAY_MS_STEP)))
        y += h + gap

        self._algo_buttons: Dict[str, PanelButton] = {}
        for key, label in ALGO_LABELS.items():
            add(f"Algo: {label}", lambda k=key: self._switch_algo(k), selectable=True)
            self._algo_buttons[key] = self._buttons[-1]
            y += h + gap

        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            self.btn_run.selected = self.runner.running
        for key, btn in getattr(self, "_algo_buttons", {}).items():
            btn.selected = key == getattr(self, "selected_algo", None)

    def _draw_metrics_and_buttons(self):
        rb = self._right_band

        card = pygame.Surface((rb.width - 20, 210), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0,0))
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        line("Metrics", big=True, color=ACCENT_GOLD)
        m = self.runner.last_metrics
        line(f"Popped: {m.get('popped', 0)}")
        line(f"Open: {m.get('open_size', 0)}")
        line(f"Closed: {m.get('closed_count', 0)}")
        line(f"Path Len: {m.get('path_len', 0)}")
        line("-" * 26)
        line(f"Algo: {ALGO_LABELS[self.selected_algo]}")
        line(f"Delay: {self.runner.delay_ms} ms/step")
        line(f"State: {self.state}")

        for b in self._buttons:
            b.draw(self.screen, self.font)

# ---------- main ----------
def main(argv=None):
    try:
        settings = load_settings(argv)
    except ConfigError as ex:
        print(f"Invalid settings: {ex}")
        raise SystemExit(2)
    logging.basicConfig(level=settings.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    asyncio.run(Viewer(settings).run())

if __name__ == "__main__":
    main()
