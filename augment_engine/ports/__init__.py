from .augment import QueryAugmentor
from .ordering import Ordered, PriorityOrdered
from .repo import Repository
from .store import Document, DocumentStore

__all__ = [
    "QueryAugmentor",
    "Ordered",
    "PriorityOrdered",
    "Repository",
    "Document",
    "DocumentStore",
]
