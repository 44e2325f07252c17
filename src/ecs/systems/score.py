from esper import World

from ecs.components.score import Score
from ecs.events.bus import EventBus, EVENT_NEW_GAME_STARTED, EVENT_SCORE_CHANGED, EVENT_SCORE_GAINED


class ScoreSystem:
    """Accumulates merge score deltas into the singleton Score component.

    Subscribes to EVENT_SCORE_GAINED and emits EVENT_SCORE_CHANGED after every
    update. A new game resets the running score but keeps the best.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_SCORE_GAINED, self.on_score_gained)
        self.event_bus.subscribe(EVENT_NEW_GAME_STARTED, self.on_new_game_started)

    def _score(self) -> Score:
        for _, score in self.world.get_component(Score):
            return score
        score = Score()
        self.world.create_entity(score)
        return score

    def on_score_gained(self, sender, **kwargs):
        amount = kwargs.get('amount', 0)
        if not amount or amount <= 0:
            return
        score = self._score()
        score.value += amount
        score.best = max(score.best, score.value)
        self.event_bus.emit(EVENT_SCORE_CHANGED, value=score.value, best=score.best, delta=amount)

    def on_new_game_started(self, sender, **kwargs):
        score = self._score()
        delta = -score.value
        score.value = 0
        self.event_bus.emit(EVENT_SCORE_CHANGED, value=0, best=score.best, delta=delta)
