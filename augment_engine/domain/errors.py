from __future__ import annotations


class AugmentationError(Exception):
    """Base class for errors raised by augment_engine itself."""


class InvalidArgumentError(AugmentationError, ValueError):
    """A required argument was missing or unusable (programmer error)."""


class EntityNotFoundError(AugmentationError, KeyError):
    def __init__(self, collection: str, entity_id: str):
        super().__init__(f"{collection}/{entity_id}")
        self.collection = collection
        self.entity_id = entity_id

    def __str__(self) -> str:
        return f"Entity not found: {self.collection}/{self.entity_id}"
