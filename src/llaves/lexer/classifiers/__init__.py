"""Line classifiers for the llaves lexer.

Each classifier is a mixin that decides whether one line (leading indent
already removed) opens a particular block type. Classifiers never move
the lexer position; the scanner commits the line afterwards.
"""

from llaves.lexer.classifiers.attribute import AttributeClassifierMixin
from llaves.lexer.classifiers.fence import FenceClassifierMixin
from llaves.lexer.classifiers.heading import HeadingClassifierMixin
from llaves.lexer.classifiers.link_ref import LinkRefClassifierMixin
from llaves.lexer.classifiers.list import ListClassifierMixin
from llaves.lexer.classifiers.quote import QuoteClassifierMixin
from llaves.lexer.classifiers.thematic import ThematicClassifierMixin

__all__ = [
    "AttributeClassifierMixin",
    "FenceClassifierMixin",
    "HeadingClassifierMixin",
    "LinkRefClassifierMixin",
    "ListClassifierMixin",
    "QuoteClassifierMixin",
    "ThematicClassifierMixin",
]
