"""
Plan building and persistence.
"""

from .models import Action, CreateAction, DeleteAction, Plan, PlanSummary
from .differ import diff, find_ambiguous_queues
from .serialize import (
    dumps_plan,
    loads_plan,
    plan_from_dict,
    plan_to_dict,
    read_plan,
    write_plan,
)

__all__ = [
    "Action",
    "CreateAction",
    "DeleteAction",
    "Plan",
    "PlanSummary",
    "diff",
    "find_ambiguous_queues",
    "dumps_plan",
    "loads_plan",
    "plan_from_dict",
    "plan_to_dict",
    "read_plan",
    "write_plan",
]
