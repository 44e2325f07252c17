from typing import Any

from ecs.events.bus import EVENT_TICK, EventBus, EVENT_GAME_OVER, EVENT_NEW_GAME_STARTED
from ecs.components.game_state import GameMode
from ecs.components.score import Score
from ecs.constants import DARK_TEXT_COLOR, SCORE_BAR_HEIGHT
from ecs.rendering.board_renderer import BoardRenderer
from ecs.systems.grid_ops import get_grid
from ecs.ui.layout import compute_board_geometry
from ecs.utils.game_state import get_game_mode
from esper import World

PADDING = 6

class RenderSystem:
    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_GAME_OVER, self.on_game_over)
        self.event_bus.subscribe(EVENT_NEW_GAME_STARTED, self.on_new_game_started)
        self._time = 0.0
        self.game_over_banner = False
        self._last_tile_layout: dict[tuple[int, int], dict[str, Any]] = {}
        self._board_renderer = BoardRenderer(self, padding=PADDING)

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1/60)
        try:
            self._time += float(dt)
        except (TypeError, ValueError):
            self._time += 1/60

    def on_game_over(self, sender, **kwargs):
        self.game_over_banner = True

    def on_new_game_started(self, sender, **kwargs):
        self.game_over_banner = False

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        # Headless safeguard: if no active Arcade window (unit tests), skip actual draw calls but still build layout cache.
        headless = False
        try:
            arcade.get_window()
        except Exception:
            headless = True
        grid = get_grid(self.world)
        tile_size, start_x, start_y = compute_board_geometry(
            self.window.width, self.window.height, grid.width, grid.height
        )
        self._board_renderer.render(arcade, grid, tile_size, start_x, start_y, headless)
        if headless:
            return
        board_top = start_y + grid.height * tile_size
        score = self._score()
        arcade.draw_text(
            f"Score {score.value}    Best {score.best}",
            self.window.width / 2,
            board_top + SCORE_BAR_HEIGHT / 2,
            DARK_TEXT_COLOR,
            font_size=20,
            anchor_x="center",
            anchor_y="center",
            bold=True,
        )
        if self.game_over_banner or get_game_mode(self.world) == GameMode.GAME_OVER:
            arcade.draw_lbwh_rectangle_filled(0, 0, self.window.width, self.window.height, (250, 248, 239, 170))
            arcade.draw_text(
                "Game over - press R",
                self.window.width / 2,
                self.window.height / 2,
                DARK_TEXT_COLOR,
                font_size=32,
                anchor_x="center",
                anchor_y="center",
                bold=True,
            )

    def _score(self) -> Score:
        for _, score in self.world.get_component(Score):
            return score
        return Score()
