from .association_rules import association_rules
from .expansion import expand, filter_patterns
from .frequency import FrequencyIndex, canonical_order, count_items, frequent_items
from .fpgrowth import FPGrowth, fpgrowth, mine_frequent_patterns
from .io import format_patterns, read_transactions, write_patterns
from .projection import ConditionalPatternBase, ConditionalProjector, conditional_tree, pattern_base
from .scheduler import MiningScheduler, PatternCollisionError
from .tree import HeaderTable, PrefixTree

__all__ = [
    "fpgrowth",
    "FPGrowth",
    "mine_frequent_patterns",
    "association_rules",
    "FrequencyIndex",
    "count_items",
    "frequent_items",
    "canonical_order",
    "PrefixTree",
    "HeaderTable",
    "ConditionalPatternBase",
    "ConditionalProjector",
    "pattern_base",
    "conditional_tree",
    "expand",
    "filter_patterns",
    "MiningScheduler",
    "PatternCollisionError",
    "read_transactions",
    "format_patterns",
    "write_patterns",
]
