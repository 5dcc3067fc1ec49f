"""Operations (mirror copy, prune extras)"""
from .context import WalkContext
from .copier import copy_tree
from .pruner import prune_extras

__all__ = ["WalkContext", "copy_tree", "prune_extras"]
