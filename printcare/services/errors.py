"""Domain exceptions raised by the store and the booking lifecycle."""

from __future__ import annotations


class PrintCareError(Exception):
    pass


class NotFoundError(PrintCareError, LookupError):
    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class TransitionNotAllowedError(PrintCareError):
    def __init__(self, current: str, requested: str):
        super().__init__(f"Transition {current} -> {requested} is not allowed")
        self.current = current
        self.requested = requested
