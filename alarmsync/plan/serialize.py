"""
Read and write plan.json.

Create entries are objects and delete entries are bare alarm-name strings;
that shape is what existing pipelines consume.
"""

import json
from pathlib import Path
from typing import Any, Dict, Union

from ..errors import PlanFormatError, PlanNotFoundError
from .models import CreateAction, DeleteAction, Plan


def plan_to_dict(plan: Plan) -> Dict[str, Any]:
    summary = plan.summary
    return {
        "region": plan.region,
        "alarm_suffix": plan.alarm_suffix,
        "create": [
            {"queue": a.queue, "alarm": a.alarm, "threshold": a.threshold}
            for a in plan.create
        ],
        "delete": [a.alarm for a in plan.delete],
        "summary": {
            "to_create": summary.to_create,
            "to_delete": summary.to_delete,
        },
    }


def plan_from_dict(data: Any) -> Plan:
    """
    Validate and convert a decoded plan document.

    Raises:
        PlanFormatError: If a field is missing or mistyped, or the summary
            counts disagree with the action lists
    """
    if not isinstance(data, dict):
        raise PlanFormatError("Plan must be a JSON object")

    region = _require(data, "region", str)
    suffix = _require(data, "alarm_suffix", str)
    raw_create = _require(data, "create", list)
    raw_delete = _require(data, "delete", list)
    if not region.strip():
        raise PlanFormatError("plan.region must not be empty")
    if not suffix:
        raise PlanFormatError("plan.alarm_suffix must not be empty")

    create = []
    for i, item in enumerate(raw_create):
        if not isinstance(item, dict):
            raise PlanFormatError(f"create[{i}] must be an object")
        queue = _require(item, "queue", str, where=f"create[{i}]")
        alarm = _require(item, "alarm", str, where=f"create[{i}]")
        threshold = _require(item, "threshold", int, where=f"create[{i}]")
        if threshold <= 0:
            raise PlanFormatError(f"create[{i}].threshold must be positive, got {threshold}")
        create.append(CreateAction(queue=queue, alarm=alarm, threshold=threshold))

    delete = []
    for i, item in enumerate(raw_delete):
        if not isinstance(item, str):
            raise PlanFormatError(f"delete[{i}] must be an alarm name string")
        delete.append(DeleteAction(alarm=item))

    plan = Plan(region=region, alarm_suffix=suffix, create=create, delete=delete)

    summary = data.get("summary")
    if summary is not None:
        if not isinstance(summary, dict):
            raise PlanFormatError("summary must be an object")
        to_create = _require(summary, "to_create", int, where="summary")
        to_delete = _require(summary, "to_delete", int, where="summary")
        if (to_create, to_delete) != (plan.summary.to_create, plan.summary.to_delete):
            raise PlanFormatError(
                f"summary ({to_create} create, {to_delete} delete) does not match "
                f"actions ({plan.summary.to_create} create, {plan.summary.to_delete} delete)"
            )

    return plan


def dumps_plan(plan: Plan) -> str:
    return json.dumps(plan_to_dict(plan), indent=2) + "\n"


def loads_plan(text: str) -> Plan:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise PlanFormatError(f"Plan is not valid JSON: {e}") from e
    return plan_from_dict(data)


def write_plan(plan: Plan, path: Union[str, Path]) -> Path:
    """
    Write a plan to disk.

    Args:
        plan: Plan to persist
        path: Destination file

    Returns:
        Path: The written file
    """
    plan_file = Path(path)
    if plan_file.parent != Path("."):
        plan_file.parent.mkdir(parents=True, exist_ok=True)

    with open(plan_file, "w", encoding="utf-8") as f:
        f.write(dumps_plan(plan))

    return plan_file


def read_plan(path: Union[str, Path]) -> Plan:
    """
    Load a plan written by ``write_plan``.

    Raises:
        PlanNotFoundError: If the file does not exist
        PlanFormatError: If the file cannot be read or is not a valid plan
    """
    plan_file = Path(path)
    if not plan_file.is_file():
        raise PlanNotFoundError(plan_file)

    try:
        with open(plan_file, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise PlanFormatError(f"Cannot read plan {plan_file}: {e}") from e

    return loads_plan(text)


def _require(data: Dict[str, Any], key: str, kind: type, where: str = "plan") -> Any:
    if key not in data:
        raise PlanFormatError(f"{where} is missing '{key}'")
    value = data[key]
    # bool is an int subclass; true/false is never a valid count or threshold
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise PlanFormatError(f"{where}.{key} must be {kind.__name__}, got {type(value).__name__}")
    return value
