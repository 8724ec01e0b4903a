"""Motion and text-object calculators."""

from .motions import (
    MOTIONS,
    CharClass,
    MotionContext,
    MotionFunc,
    MotionResult,
    MotionType,
    char_class,
    find_matching_bracket,
    get_motion,
)
from .text_objects import (
    TEXT_OBJECT_DELIMITERS,
    TextObjectRange,
    TextObjectScope,
    resolve_text_object,
)

__all__ = [
    "MOTIONS",
    "CharClass",
    "MotionContext",
    "MotionFunc",
    "MotionResult",
    "MotionType",
    "TEXT_OBJECT_DELIMITERS",
    "TextObjectRange",
    "TextObjectScope",
    "char_class",
    "find_matching_bracket",
    "get_motion",
    "resolve_text_object",
]
