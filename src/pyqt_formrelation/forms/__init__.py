"""
Form containers.

RelationForm hosts field adapters and relation plugins.
"""

from .relation_form import RelationForm

__all__ = [
    "RelationForm",
]
