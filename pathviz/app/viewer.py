# pathviz/app/viewer.py
#!/usr/bin/env python3
"""
A* Pathfinding Viewer — wall editing + animated search

- Mouse:
    [Left click]   -> toggle wall
    [Right click]  -> set start, then end; right click an endpoint to clear it
- Keyboard:
    [SPACE]      -> run A*
    [C]          -> clear path (keep walls)
    [M]          -> random maze
    [R]          -> reset grid
    [+]/[-]      -> animation speed
    [Q]/[ESC]    -> quit

Config (CLI wins over ENV):
- --rows= / PATHVIZ_ROWS, --cols= / PATHVIZ_COLS
- --speed= / PATHVIZ_SPEED            (observations shown per second)
- --density= / PATHVIZ_WALL_DENSITY   (random maze)
- --log-level= / PATHVIZ_LOG_LEVEL

The search itself runs on a worker thread; it only talks back through the
event queue, which this module drains at the configured speed.
"""

# --- bootstrap import path so `from pathviz...` works when run as a script ---
import sys, os, time, queue, logging, threading
from pathlib import Path
_REPO_ROOT = Path(__file__).resolve().parents[2]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))
# -------------------------------------------------------------------------

from typing import Any, Dict, List, Optional, Tuple
import pygame

from pathviz.app.maze import random_walls, WALL_DENSITY_DEFAULT
from pathviz.core.astar import run_search, validate_request
from pathviz.core.errors import InvalidRequest, InternalConsistencyError
from pathviz.core.grid import Grid, configure_grid
from pathviz.core.observer import CancelToken
from pathviz.core.types import (
    Coord, SearchEvent, SearchResult,
    VISITED, FRONTIER_ADDED, PATH_MEMBER, PATH_FOUND, NO_PATH,
)

# ---------- Config ----------
DEFAULTS: Dict[str, Any] = {
    "rows": 20,
    "cols": 30,
    "speed": 60,
    "density": WALL_DENSITY_DEFAULT,
    "log_level": "WARNING",
}
_ENV_KEYS = {
    "rows": "PATHVIZ_ROWS",
    "cols": "PATHVIZ_COLS",
    "speed": "PATHVIZ_SPEED",
    "density": "PATHVIZ_WALL_DENSITY",
    "log_level": "PATHVIZ_LOG_LEVEL",
}

def _parse(key: str, raw: str) -> Any:
    if key in ("rows", "cols", "speed"):
        v = int(raw)
        if v < 1:
            raise ValueError(f"{key} must be positive")
        return v
    if key == "density":
        v = float(raw)
        if not 0.0 <= v <= 1.0:
            raise ValueError("density must be within [0, 1]")
        return v
    return raw.upper()

def resolve_config(argv: Optional[List[str]] = None, env: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    argv = sys.argv[1:] if argv is None else argv
    env = os.environ if env is None else env
    raw: Dict[str, str] = {}
    for key, env_key in _ENV_KEYS.items():
        if env_key in env:
            raw[key] = env[env_key]
    for arg in argv:
        if arg.startswith("--") and "=" in arg:
            k, v = arg[2:].split("=", 1)
            k = k.replace("-", "_")
            if k in DEFAULTS:
                raw[k] = v
    cfg = dict(DEFAULTS)
    for key, value in raw.items():
        try:
            cfg[key] = _parse(key, value)
        except ValueError as ex:
            print(f"Ignoring {key}={value!r}: {ex}")
    return cfg

PANEL_W = 300            # right band: metrics + buttons
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 28
FONT_NAME = None  # default pygame font
SPEED_MIN, SPEED_MAX, SPEED_STEP = 10, 600, 10

# Colors
WHITE       = (255,255,255)
BLACK       = (  0,  0,  0)
LIGHT_GRAY  = (211,211,211)
GREEN       = (  0,128,  0)
RED         = (255,  0,  0)
LIGHT_BLUE  = (173,216,230)
FRONTIER    = ( 70,105,165)
GOLD        = (255,215,  0)

CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)

# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.enabled = True

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        if not self.enabled:
            bg = (30, 32, 38, 160)
        elif self.hover:
            bg = (46, 50, 60, 230)
        else:
            bg = (36, 40, 48, 220)
        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)

        # subtle highlight top band
        hi = pygame.Surface((self.rect.width, 18), pygame.SRCALPHA)
        pygame.draw.rect(hi, (255,255,255,20), hi.get_rect(), border_radius=10)
        base.blit(hi, (0,0))
        screen.blit(base, self.rect.topleft)

        color = (235,238,242) if self.enabled else (120,124,130)
        text = font.render(self.label, True, color)
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event):
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.enabled and self.rect.collidepoint(event.pos):
                self.callback()

# ---------- Viewer ----------
class Viewer:
    def __init__(self, grid: Grid, config: Dict[str, Any]):
        pygame.init()

        self.grid = grid
        self.config = config
        self.font_small = pygame.font.Font(FONT_NAME, 14)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        # window size only; _layout picks the real cell_size for it
        cs0 = self._initial_cell_size(grid)
        grid_px_w = GRID_MARGIN*2 + grid.cols * cs0
        grid_px_h = GRID_MARGIN*2 + grid.rows * cs0
        win_w = grid_px_w + PANEL_W
        win_h = max(grid_px_h, 480)

        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("A* Pathfinding Visualizer")

        self._buttons: List[UIButton] = []
        self._layout(win_w, win_h)

        # overlays, fed only from drained events
        self.open_set: set = set()
        self.closed_set: set = set()
        self.path_cells: List[Coord] = []
        self._path_lookup: set = set()
        self.result: Optional[SearchResult] = None

        # worker
        self._events: "queue.Queue[Any]" = queue.Queue()
        self._cancel = CancelToken()
        self._worker: Optional[threading.Thread] = None

        self.running = False
        self.clock = pygame.time.Clock()
        self.speed = config["speed"]
        self._budget = 0.0
        self._last_t = time.time()
        self.state = "Idle"

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits window and center the grid."""
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = int(max(6, min(avail_w // self.grid.cols, avail_h // self.grid.rows)))

        plate_w = self.grid.cols * self.cell_size + 2 * GRID_MARGIN
        plate_h = self.grid.rows * self.cell_size + 2 * GRID_MARGIN
        left_x = max(0, (win_w - (plate_w + PANEL_W)) // 2)
        top_y  = max(0, (win_h - plate_h) // 2)

        self.canvas_rect = pygame.Rect(left_x, top_y, plate_w, plate_h)
        self._grid_origin = (self.canvas_rect.x + GRID_MARGIN,
                             self.canvas_rect.y + GRID_MARGIN)
        self._right_band = pygame.Rect(self.canvas_rect.right, 0,
                                       max(PANEL_W, win_w - self.canvas_rect.right),
                                       win_h)
        self._build_buttons()

    def _initial_cell_size(self, grid: Grid) -> int:
        """Cell size used to pick the opening window size."""
        target_h = 720 - GRID_MARGIN*2
        return max(10, min(CELL_SIZE_DEFAULT, target_h // grid.rows))

    def _cell_at(self, pos: Tuple[int, int]) -> Optional[Coord]:
        ox, oy = self._grid_origin
        if pos[0] < ox or pos[1] < oy:
            return None
        col = (pos[0] - ox) // self.cell_size
        row = (pos[1] - oy) // self.cell_size
        return (row, col) if self.grid.in_bounds((row, col)) else None

    # ---------- main loop ----------
    def run(self):
        while True:
            self._handle_events()
            self._drain_events()
            self._draw()
            self.clock.tick(60)

    def _quit(self):
        self._stop_worker()
        pygame.quit(); sys.exit(0)

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                self._quit()
            elif e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_ESCAPE, pygame.K_q):
                    self._quit()
                elif e.key == pygame.K_SPACE:
                    self._start_search()
                elif e.key == pygame.K_c:
                    self._clear_path()
                elif e.key == pygame.K_m:
                    self._random_maze()
                elif e.key == pygame.K_r:
                    self._reset_grid()
                elif e.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
                    self._bump_speed(+1)
                elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE, pygame.K_KP_MINUS):
                    self._bump_speed(-1)
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((max(480, e.w), max(360, e.h)), pygame.RESIZABLE)
                self._layout(*self.screen.get_size())
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
                for b in self._buttons:
                    b.handle_mouse(e)
                if e.type == pygame.MOUSEBUTTONDOWN:
                    self._edit_cell(e)

    # ---------- editing (frozen while a search runs) ----------
    def _edit_cell(self, e: pygame.event.Event):
        if self.running:
            return
        c = self._cell_at(e.pos)
        if c is None:
            return
        row, col = c
        g = self.grid
        if e.button == 1:
            g.toggle_obstacle(row, col)
        elif e.button == 3:
            if g.start is None and c != g.end and not g.is_obstacle(c):
                g.set_start(row, col)
            elif g.end is None and c != g.start and not g.is_obstacle(c):
                g.set_end(row, col)
            elif c == g.start:
                g.clear_start()
            elif c == g.end:
                g.clear_end()

    # ---------- search lifecycle ----------
    def _start_search(self):
        if self.running:
            return
        try:
            validate_request(self.grid, self.grid.start, self.grid.end)
        except InvalidRequest as ex:
            print(f"Cannot run A*: {ex}")
            self.state = "Set start & end"
            return
        self._stop_worker()
        self._reset_overlays()
        self._cancel = CancelToken()
        self._worker = threading.Thread(
            target=self._search_worker,
            args=(self.grid.start, self.grid.end, self._events, self._cancel),
            daemon=True,
        )
        self.running = True
        self.state = "Running"
        self._budget = 0.0
        self._last_t = time.time()
        self._worker.start()

    def _search_worker(self, start: Coord, end: Coord, events: "queue.Queue[Any]", cancel: CancelToken):
        try:
            result = run_search(self.grid, start, end, observer=events.put, cancel=cancel)
        except InternalConsistencyError as ex:
            events.put(ex)
            return
        events.put(result)

    def _stop_worker(self):
        if self._worker is not None and self._worker.is_alive():
            self._cancel.cancel()
            self._worker.join()
        self._worker = None
        self._events = queue.Queue()  # drop whatever the old run left behind
        self.running = False

    def _drain_events(self):
        now = time.time()
        self._budget += (now - self._last_t) * self.speed
        self._last_t = now
        while self._budget >= 1.0:
            try:
                item = self._events.get_nowait()
            except queue.Empty:
                self._budget = min(self._budget, 1.0)
                return
            if isinstance(item, SearchEvent):
                self._apply_event(item)
                self._budget -= 1.0
            elif isinstance(item, SearchResult):
                self._finish(item)
            elif isinstance(item, InternalConsistencyError):
                self.running = False
                self.state = "Error"
                raise item

    def _apply_event(self, ev: SearchEvent):
        if ev.kind == VISITED:
            self.open_set.discard(ev.coord)
            self.closed_set.add(ev.coord)
        elif ev.kind == FRONTIER_ADDED:
            self.open_set.add(ev.coord)
        elif ev.kind == PATH_MEMBER:
            self.path_cells.append(ev.coord)

    def _finish(self, result: SearchResult):
        self.result = result
        self.running = False
        if result.status == PATH_FOUND:
            self.state = "Done"
        elif result.status == NO_PATH:
            self.state = "No path"
            print("No path found.")
        else:
            self.state = "Cancelled"

    # ---------- grid actions ----------
    def _reset_overlays(self):
        self.open_set.clear()
        self.closed_set.clear()
        self.path_cells = []
        self.result = None

    def _clear_path(self):
        self._stop_worker()
        self.grid.reset(preserve_obstacles=True)
        self._reset_overlays()
        self.state = "Idle"

    def _reset_grid(self):
        self._stop_worker()
        self.grid.reset(preserve_obstacles=False)
        self.grid.clear_start()
        self.grid.clear_end()
        self._reset_overlays()
        self.state = "Idle"

    def _random_maze(self):
        self._stop_worker()
        self._reset_overlays()
        random_walls(self.grid, self.config["density"])
        self.state = "Idle"

    def _bump_speed(self, dv: int):
        self.speed = int(max(SPEED_MIN, min(SPEED_MAX, self.speed + dv * SPEED_STEP)))

    # ---------- drawing ----------
    def _draw(self):
        self._draw_backdrop()
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _draw_backdrop(self):
        w, h = self.screen.get_size()
        top = (24, 26, 32); bot = (36, 40, 48)
        for y in range(h):
            t = y / max(1, h-1)
            c = (
                int(top[0] + (bot[0]-top[0]) * t),
                int(top[1] + (bot[1]-top[1]) * t),
                int(top[2] + (bot[2]-top[2]) * t),
            )
            pygame.draw.line(self.screen, c, (0, y), (w, y))

    def _color_for(self, c: Coord) -> Tuple[int, int, int]:
        if c == self.grid.start:
            return GREEN
        if c == self.grid.end:
            return RED
        if self.grid.is_obstacle(c):
            return BLACK
        if c in self._path_lookup:
            return GOLD
        if c in self.closed_set:
            return LIGHT_BLUE
        if c in self.open_set:
            return FRONTIER
        return WHITE

    def _draw_grid(self):
        cs = self.cell_size
        ox, oy = self._grid_origin
        self._path_lookup = set(self.path_cells)
        for row in range(self.grid.rows):
            for col in range(self.grid.cols):
                rect = pygame.Rect(ox + col*cs, oy + row*cs, cs, cs)
                pygame.draw.rect(self.screen, self._color_for((row, col)), rect)
                pygame.draw.rect(self.screen, LIGHT_GRAY, rect, 1)

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
        h = 38
        gap = 10

        def add(label, cb):
            nonlocal y
            self._buttons.append(UIButton(label, pygame.Rect(x, y, w, h), cb))
            y += h + gap

        add("Run A*", self._start_search)
        add("Clear Path", self._clear_path)
        add("Random Maze", self._random_maze)
        add("Reset Grid", self._reset_grid)

        half = (w - 8) // 2
        self._buttons.append(UIButton("Speed −", pygame.Rect(x, y, half, h), lambda: self._bump_speed(-1)))
        self._buttons.append(UIButton("Speed +", pygame.Rect(x + half + 8, y, half, h), lambda: self._bump_speed(+1)))

    def _draw_metrics_and_buttons(self):
        rb = self._right_band

        card_h = 210
        card = pygame.Surface((rb.width - 20, card_h), pygame.SRCALPHA)
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

        line("A* Search", big=True, color=ACCENT_GOLD)
        line(f"State: {self.state}")
        line(f"Visited: {len(self.closed_set)}")
        line(f"Frontier: {len(self.open_set)}")
        line(f"Path Len: {len(self.result.path) if self.result and self.result.found else 0}")
        line(f"Walls: {self.grid.obstacle_count()}")
        line(f"Speed: {self.speed} events/s")

        for b in self._buttons:
            b.enabled = not self.running or b.label.startswith(("Speed", "Clear", "Reset"))
            b.draw(self.screen, self.font)

# ---------- main ----------
def main(rows: Optional[int] = None, cols: Optional[int] = None):
    config = resolve_config()
    if rows is not None:
        config["rows"] = rows
    if cols is not None:
        config["cols"] = cols
    logging.basicConfig(
        level=getattr(logging, config["log_level"], logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    grid = configure_grid(config["rows"], config["cols"])
    Viewer(grid, config).run()

if __name__ == "__main__":
    main()
