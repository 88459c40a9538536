from abc import ABC, abstractmethod
from typing import Generic, TypeVar

InT = TypeVar("InT")
OutT = TypeVar("OutT")


class Transformation(ABC, Generic[InT, OutT]):
    """Turns source responses into a derived view."""

    @abstractmethod
    def transform(self, data: InT) -> OutT:
        pass
