import logging
from datetime import datetime
from typing import Callable, Dict, List, NamedTuple

__all__ = [
    'TRANSACTION_ADDED', 'BUDGET_ALERT', 'GOAL_REACHED',
    'Event', 'EventBus', 'log_event_handler',
]

logger = logging.getLogger(__name__)

TRANSACTION_ADDED = "TRANSACTION_ADDED"
BUDGET_ALERT = "BUDGET_ALERT"
GOAL_REACHED = "GOAL_REACHED"


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


Handler = Callable[[Event, dict], dict]


class EventBus:
    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self._subscribers: Dict[str, List[Handler]] = {}
        self._clock = clock

    def subscribe(self, name: str, handler: Handler) -> None:
        self._subscribers.setdefault(name, []).append(handler)

    def unsubscribe(self, name: str, handler: Handler) -> None:
        handlers = self._subscribers.get(name, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, name: str, payload: dict) -> List[dict]:
        handlers = self._subscribers.get(name)
        if not handlers:
            return []

        event = Event(name=name, ts=self._clock().isoformat(), payload=payload)
        return [handler(event, payload) for handler in list(handlers)]


def log_event_handler(event: Event, payload: dict) -> dict:
    if event.name == BUDGET_ALERT:
        logger.warning(
            "Budget %s for %s at %.0f%% of limit (%s)",
            payload.get("tier"),
            payload.get("category"),
            payload.get("ratio", 0) * 100,
            payload.get("period"),
        )
    elif event.name == GOAL_REACHED:
        logger.info("Goal reached: %s", payload.get("name"))
    else:
        logger.debug("%s %s", event.name, payload)
    return {"logged": event.name}
