"""Entry point for the sliding-tile merge puzzle.

Sets up ECS world, event bus, systems, and Arcade window.
"""
import arcade
from arcade import Window, run, set_background_color
from ecs.world import create_world, BoardConfig
from ecs.constants import BACKGROUND_COLOR, WINDOW_HEIGHT, WINDOW_WIDTH
from ecs.events.bus import EVENT_TICK, EventBus, EVENT_KEY_PRESS, EVENT_POINTER_DOWN, EVENT_POINTER_UP
from ecs.systems.board import BoardSystem
from ecs.systems.input import InputSystem
from ecs.systems.movement import MovementSystem
from ecs.systems.render import RenderSystem
from ecs.systems.score import ScoreSystem
from ecs.systems.settle import SettleSystem

KEY_NAMES = {
    arcade.key.W: "W",
    arcade.key.A: "A",
    arcade.key.S: "S",
    arcade.key.D: "D",
    arcade.key.UP: "UP",
    arcade.key.DOWN: "DOWN",
    arcade.key.LEFT: "LEFT",
    arcade.key.RIGHT: "RIGHT",
    arcade.key.R: "R",
}


class SlideMergeWindow(Window):
    def __init__(self, config: BoardConfig | None = None):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, "2048")
        self.set_update_rate(1/60)
        self.event_bus = EventBus()
        self.world = create_world(self.event_bus, config, populate=False)

        # Board and movement systems
        self.score_system = ScoreSystem(self.world, self.event_bus)
        self.board_system = BoardSystem(self.world, self.event_bus)
        self.movement_system = MovementSystem(self.world, self.event_bus)
        self.settle_system = SettleSystem(self.world, self.event_bus)

        # Interface systems
        self.input_system = InputSystem(self.event_bus)
        self.render_system = RenderSystem(self.world, self.event_bus, self)

        set_background_color(BACKGROUND_COLOR)
        self.board_system.new_game()

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_key_press(self, symbol: int, modifiers: int):
        name = KEY_NAMES.get(symbol)
        if name is not None:
            self.event_bus.emit(EVENT_KEY_PRESS, key=name)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        if button == arcade.MOUSE_BUTTON_LEFT:
            self.event_bus.emit(EVENT_POINTER_DOWN, x=x, y=y)

    def on_mouse_release(self, x: float, y: float, button: int, modifiers: int):
        if button == arcade.MOUSE_BUTTON_LEFT:
            self.event_bus.emit(EVENT_POINTER_UP, x=x, y=y)


def main():
    window = SlideMergeWindow()
    run()

if __name__ == "__main__":
    main()
