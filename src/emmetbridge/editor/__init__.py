"""Editor capability interface, insertion planning and an in-memory host."""

from .models import TextRange, InsertionPlan, OutputInfo, ContextNode, narrow_to_non_space
from .base import EditorProxy
from .normalize import TextNormalizer
from .planner import InsertionPlanner, apply_plan, reindent
from .buffer import BufferEditor

__all__ = [
    "TextRange",
    "InsertionPlan",
    "OutputInfo",
    "ContextNode",
    "narrow_to_non_space",
    "EditorProxy",
    "TextNormalizer",
    "InsertionPlanner",
    "apply_plan",
    "reindent",
    "BufferEditor",
]
