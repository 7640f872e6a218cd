"""Application events and the bus that carries them from the UI to state and back."""

from enum import Enum, auto
from typing import Any, Callable


class EventType(Enum):
    # Authoritative state changed (published by StateManager)
    PARAMS_CHANGED = auto()       # data: params (PoseParameters)
    CAMERA_CHANGED = auto()       # data: camera (CameraConfig)

    # UI edit requests (published by tabs)
    POSE_COMPONENT_SET = auto()   # data: field (str), index (int), value (float)
    PARAMS_RANDOMIZE = auto()
    PARAMS_RESET = auto()
    CAMERA_FOV_SET = auto()       # data: fov (float)
    CAMERA_POSITION_SET = auto()  # data: axis (int), value (float)
    CAMERA_RESET = auto()

    # AI pose synthesis
    AI_POSE_REQUESTED = auto()    # data: prompt (str)
    AI_BUSY_CHANGED = auto()      # data: busy (bool)

    # Parameter files / snapshots
    FILE_IMPORT_REQUESTED = auto()    # data: path (str)
    FILE_EXPORT_REQUESTED = auto()    # data: path (str)
    SNAPSHOT_REQUESTED = auto()       # data: path (str)

    # User-facing notification
    NOTIFY = auto()               # data: message (str), error (bool)


Handler = Callable[..., Any]


class EventBus:
    """Synchronous publish/subscribe.

    Handlers run on the publishing thread, in subscription order, with the
    payload as keyword arguments. Exceptions propagate to the publisher.
    """

    def __init__(self):
        self._handlers: dict[EventType, list[Handler]] = {}

    def subscribe(self, event_type: EventType, handler: Handler) -> Handler:
        """Register *handler*; returns it so this can be used as a decorator."""
        self._handlers.setdefault(event_type, []).append(handler)
        return handler

    def unsubscribe(self, event_type: EventType, handler: Handler) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, event_type: EventType, **data: Any) -> None:
        # Snapshot so handlers may (un)subscribe while being called
        for handler in tuple(self._handlers.get(event_type, ())):
            handler(**data)

    def clear(self) -> None:
        self._handlers.clear()
