from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Tuple

from ecs.components.cell import Cell
from ecs.components.tile import Tile
from ecs.constants import BOARD_COLOR, DARK_TEXT_COLOR, EMPTY_CELL_COLOR, LIGHT_TEXT_COLOR
from ecs.ui.layout import cell_center

if TYPE_CHECKING:
    from ecs.components.grid import Grid
    from ecs.systems.render import RenderSystem

Color = Tuple[int, int, int]

TILE_COLORS: Dict[int, Color] = {
    2: (238, 228, 218),
    4: (237, 224, 200),
    8: (242, 177, 121),
    16: (245, 149, 99),
    32: (246, 124, 95),
    64: (246, 94, 59),
    128: (237, 207, 114),
    256: (237, 204, 97),
    512: (237, 200, 80),
    1024: (237, 197, 63),
    2048: (237, 194, 46),
}
HIGH_TILE_COLOR: Color = (60, 58, 50)


def tile_background(value: int) -> Color:
    return TILE_COLORS.get(value, HIGH_TILE_COLOR)


def tile_text_color(value: int) -> Color:
    return DARK_TEXT_COLOR if value <= 4 else LIGHT_TEXT_COLOR


class BoardRenderer:
    def __init__(self, render_system: RenderSystem, padding: int = 6):
        self._rs = render_system
        self._padding = padding

    def render(self, arcade, grid: Grid, tile_size: int, start_x: float, start_y: float, headless: bool) -> None:
        rs = self._rs
        rs._last_tile_layout = {}
        draw_size = max(tile_size - self._padding * 2, 4)

        if not headless:
            arcade.draw_lbwh_rectangle_filled(
                start_x - self._padding,
                start_y - self._padding,
                grid.width * tile_size + self._padding * 2,
                grid.height * tile_size + self._padding * 2,
                BOARD_COLOR,
            )

        for cell_entity in grid.cells:
            cell = rs.world.component_for_entity(cell_entity, Cell)
            cx, cy = cell_center(cell.x, cell.y, grid.height, tile_size, start_x, start_y)
            value = None
            if cell.tile is not None:
                try:
                    value = rs.world.component_for_entity(cell.tile, Tile).value
                except KeyError:
                    value = None
            if value is not None:
                rs._last_tile_layout[(cell.x, cell.y)] = {
                    "entity": cell.tile,
                    "center": (cx, cy),
                    "value": value,
                }
            if headless:
                continue
            left = cx - draw_size / 2
            bottom = cy - draw_size / 2
            if value is None:
                arcade.draw_lbwh_rectangle_filled(left, bottom, draw_size, draw_size, EMPTY_CELL_COLOR)
                continue
            arcade.draw_lbwh_rectangle_filled(left, bottom, draw_size, draw_size, tile_background(value))
            digits = len(str(value))
            font_size = max(10, int(draw_size * (0.4 if digits <= 2 else 0.3 if digits == 3 else 0.22)))
            arcade.draw_text(
                str(value),
                cx,
                cy,
                tile_text_color(value),
                font_size=font_size,
                anchor_x="center",
                anchor_y="center",
                bold=True,
            )
