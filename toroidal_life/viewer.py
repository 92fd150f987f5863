"""
Interactive Pygame Viewer for the Game of Life

Draws a Simulation's grid with 1-pixel grid lines, repainting only the
cells that changed since the previous generation. The grid surface is
scaled to fit the window.

Controls:
  SPACE       Play / Pause
  N           Single step (while paused)
  F           Toggle reduced frame rate
  H           Toggle HUD overlay
  1-7         Load preset
  Q / ESC     Quit
  Mouse L     Toggle cell (while paused)
"""

import numpy as np
import pygame

from .controls import THEME, Toolbar
from .presets import PRESET_ORDER, PRESETS, get_preset

CELL_SIZE_PX = 13
GRID_PITCH = CELL_SIZE_PX + 1
DEAD_COLOR = (255, 255, 255)
ALIVE_COLOR = (0, 0, 0)
LINE_COLOR = (204, 204, 204)
HUD_HEIGHT = 24


def canvas_size(width, height):
    """Pixel size of the unscaled grid surface for a width x height grid."""
    return width * GRID_PITCH + 1, height * GRID_PITCH + 1


def cell_at(px, py, width, height):
    """Map a point on the unscaled grid surface to (row, col).

    Points on the far grid line are clamped into the last row/column.
    Returns None for negative coordinates.
    """
    if px < 0 or py < 0:
        return None
    row = min(int(py // GRID_PITCH), height - 1)
    col = min(int(px // GRID_PITCH), width - 1)
    return row, col


def fit_rect(surface_size, area):
    """Largest rect with the surface's aspect ratio centered in `area`."""
    sw, sh = surface_size
    scale = min(area.width / sw, area.height / sh)
    w = max(1, int(sw * scale))
    h = max(1, int(sh * scale))
    return pygame.Rect(area.x + (area.width - w) // 2, area.y + (area.height - h) // 2, w, h)


def draw_grid_lines(surface, width, height):
    w_px, h_px = canvas_size(width, height)
    for i in range(width + 1):
        x = i * GRID_PITCH
        pygame.draw.line(surface, LINE_COLOR, (x, 0), (x, h_px - 1))
    for j in range(height + 1):
        y = j * GRID_PITCH
        pygame.draw.line(surface, LINE_COLOR, (0, y), (w_px - 1, y))


def _fill_cell(surface, row, col, color):
    surface.fill(color, (col * GRID_PITCH + 1, row * GRID_PITCH + 1,
                         CELL_SIZE_PX, CELL_SIZE_PX))


def draw_all_cells(surface, grid):
    """Full repaint: background, grid lines, then every live cell."""
    surface.fill(DEAD_COLOR)
    draw_grid_lines(surface, grid.width, grid.height)
    for row_no, row in enumerate(grid.rows()):
        for col in np.flatnonzero(row):
            _fill_cell(surface, row_no, int(col), ALIVE_COLOR)


def draw_changed_cells(surface, grid):
    """Repaint only cells that differ from the previous generation.

    Returns:
        Number of cells repainted
    """
    painted = 0
    for row_no, (row, old_row) in enumerate(grid.rows_with_previous()):
        for col in np.flatnonzero(row != old_row):
            color = ALIVE_COLOR if row[col] else DEAD_COLOR
            _fill_cell(surface, row_no, int(col), color)
            painted += 1
    return painted


class Viewer:
    def __init__(self, simulation, width=900, height=900):
        self.sim = simulation
        self.canvas_w = width
        self.canvas_h = height
        self.running = True
        self.show_hud = True

        self.grid_surface = None
        self.toolbar = None
        self.preset_buttons = None
        self.play_button = None

        # Redraw bookkeeping filled in by the simulation listener
        self._full_redraw = True
        self._steps_since_draw = 0

        simulation.add_listener(self._on_grid_change)

    def _on_grid_change(self, grid, full_redraw):
        if full_redraw:
            self._full_redraw = True
        else:
            self._steps_since_draw += 1

    # -----------------------------------------------------------------------
    # Drawing
    # -----------------------------------------------------------------------

    def _redraw_grid(self):
        grid = self.sim.grid
        size = canvas_size(grid.width, grid.height)
        if self.grid_surface is None or self.grid_surface.get_size() != size:
            self.grid_surface = pygame.Surface(size)
            self._full_redraw = True

        # Diffing against the previous buffer is only exact for one step
        if self._full_redraw or self._steps_since_draw > 1:
            draw_all_cells(self.grid_surface, grid)
        elif self._steps_since_draw == 1:
            draw_changed_cells(self.grid_surface, grid)
        self._full_redraw = False
        self._steps_since_draw = 0

    def _canvas_area(self):
        top = self.toolbar.height if self.toolbar else 0
        return pygame.Rect(0, top + HUD_HEIGHT, self.canvas_w, self.canvas_h)

    def hud_text(self):
        """One-line status: preset, generation, density, size, frame rate."""
        stats = self.sim.grid.stats
        preset = get_preset(self.sim.preset_key) if self.sim.preset_key else None
        name = preset["name"] if preset else "Custom"
        line = (f"{name}  |  Gen: {stats['generation']:,}  |  "
                f"Alive: {stats['alive_pct']:.1f}%  |  "
                f"{self.sim.grid.width}x{self.sim.grid.height}  |  "
                f"{self.sim.frame_timer.format()}")
        if self.sim.reduced_fps:
            line += f"  |  {self.sim.config.reduced_frame_delay_ms:g}ms"
        if not self.sim.running:
            line = "[PAUSED]  " + line
        return line

    def _draw_hud(self, screen):
        if not self.show_hud:
            return
        text_surface = self.font.render(self.hud_text(), True, THEME["text"])
        screen.blit(text_surface, (10, self.toolbar.height + 5))

    # -----------------------------------------------------------------------
    # Input
    # -----------------------------------------------------------------------

    def _build_toolbar(self):
        toolbar = Toolbar(self.canvas_w)
        self.play_button = toolbar.add_button("Play/Pause", on_click=self.sim.toggle_running)
        toolbar.add_button("Toggle FPS", on_click=self.sim.toggle_reduced_fps)
        toolbar.add_separator()
        names = [PRESETS[k]["name"] for k in PRESET_ORDER]
        selected = PRESET_ORDER.index(self.sim.preset_key) if self.sim.preset_key in PRESET_ORDER else -1
        self.preset_buttons = toolbar.add_button_row(
            names, selected=selected, on_select=self._on_preset_select
        )
        self.toolbar = toolbar

    def _on_preset_select(self, idx, name):
        self.sim.load_preset(PRESET_ORDER[idx])

    def _handle_click(self, pos):
        rect = fit_rect(self.grid_surface.get_size(), self._canvas_area())
        if not rect.collidepoint(pos):
            return
        sw, sh = self.grid_surface.get_size()
        px = (pos[0] - rect.x) * sw / rect.width
        py = (pos[1] - rect.y) * sh / rect.height
        cell = cell_at(px, py, self.sim.grid.width, self.sim.grid.height)
        if cell is not None:
            self.sim.toggle_cell(*cell)

    def _handle_keydown(self, event):
        key = event.key

        if key in (pygame.K_q, pygame.K_ESCAPE):
            self.running = False

        elif key == pygame.K_SPACE:
            self.sim.toggle_running()

        elif key == pygame.K_n:
            self.sim.step_once()

        elif key == pygame.K_f:
            self.sim.toggle_reduced_fps()

        elif key == pygame.K_h:
            self.show_hud = not self.show_hud

        # Preset selection (1-7)
        elif pygame.K_1 <= key <= pygame.K_9:
            idx = key - pygame.K_1
            if idx < len(PRESET_ORDER):
                self.sim.load_preset(PRESET_ORDER[idx])
                if self.preset_buttons:
                    self.preset_buttons.selected = idx
                    self.preset_buttons.update_active()

    # -----------------------------------------------------------------------
    # Main loop
    # -----------------------------------------------------------------------

    def run(self):
        """Main viewer loop."""
        pygame.init()

        self._build_toolbar()
        screen = pygame.display.set_mode(
            (self.canvas_w, self.toolbar.height + HUD_HEIGHT + self.canvas_h)
        )
        pygame.display.set_caption("Game of Life")
        clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("menlo", 12)

        while self.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                    continue

                if event.type == pygame.KEYDOWN:
                    self._handle_keydown(event)
                    continue

                if self.toolbar.handle_event(event):
                    continue

                if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    if self.grid_surface is not None:
                        self._handle_click(event.pos)

            # Ticks scheduled by the simulation run on the pygame clock
            self.sim.scheduler.run_pending(pygame.time.get_ticks())

            self._redraw_grid()

            screen.fill(THEME["bg"])
            self.play_button.active = self.sim.running
            self.toolbar.draw(screen, self.font)
            self._draw_hud(screen)
            rect = fit_rect(self.grid_surface.get_size(), self._canvas_area())
            screen.blit(pygame.transform.scale(self.grid_surface, rect.size), rect.topleft)

            pygame.display.flip()
            clock.tick(60)

        pygame.quit()
