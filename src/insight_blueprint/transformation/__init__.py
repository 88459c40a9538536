from .base import Transformation
from .combine_events import CombineEventsTransformation

__all__ = ["CombineEventsTransformation", "Transformation"]
