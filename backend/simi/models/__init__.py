"""
Models package.

Typed wrappers over stored records plus the chainable collection used by themes.
"""

from .base import Model
from .collection import ModelCollection
from .compare import Operator, compare
from .content import ContentModel, ModelArticle, ModelCategory, ModelPage

__all__ = [
    "ContentModel",
    "Model",
    "ModelArticle",
    "ModelCategory",
    "ModelCollection",
    "ModelPage",
    "Operator",
    "compare",
]
