"""Strategy functionality: strategy models and the type classifier."""

from automapper.core.strategy.classifier import ConverterLookup, classify
from automapper.core.strategy.models import FieldStep, MappingPlan, Strategy

__all__ = [
    # Models
    "Strategy",
    "FieldStep",
    "MappingPlan",
    # Classifier
    "ConverterLookup",
    "classify",
]
