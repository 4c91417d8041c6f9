import logging
from typing import Callable, List

logger = logging.getLogger(__name__)

class GameEvents:
    def __init__(self):
        self._on_complete_listeners: List[Callable] = []

    def subscribe_complete(self, callback: Callable):
        if callback not in self._on_complete_listeners:
            self._on_complete_listeners.append(callback)

    async def notify_complete(self, db, session, winner):
        # A failing listener must not undo the finished game
        for listener in self._on_complete_listeners:
            try:
                await listener(db, session, winner)
            except Exception:
                logger.exception("Event listener %s failed", getattr(listener, "__name__", listener))

game_events = GameEvents()
