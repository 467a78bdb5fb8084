"""
Random group making and no-repeat student picking.
"""

from app.grouping.partitioner import (
    GroupAssignment,
    GroupingOptions,
    GroupingStrategy,
    InvalidGroupingOptions,
    partition,
)
from app.grouping.picker import Picker, PickerState, PickResult
from app.grouping.roster import list_present_student_names
from app.grouping.session import ClassSession, SessionRegistry

__all__ = [
    "GroupAssignment",
    "GroupingOptions",
    "GroupingStrategy",
    "InvalidGroupingOptions",
    "partition",
    "Picker",
    "PickerState",
    "PickResult",
    "list_present_student_names",
    "ClassSession",
    "SessionRegistry",
]
