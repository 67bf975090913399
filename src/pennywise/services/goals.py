"""Goal persistence and progress tracking."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping

from ..constants.categories import (
    GOAL_COMPLETED,
    GOAL_IN_PROGRESS,
    GOAL_NOT_STARTED,
)
from ..domain.repositories import GoalRepository
from ..errors import ValidationError
from ..logging_config import get_logger
from ..models.goal import Goal
from . import ownership

logger = get_logger("goals")

LABEL = "Goal"


def next_status(status: str, *, current_amount: float, target_amount: float) -> str:
    """Derive a goal's status after its saved amount changes.

    Completed is terminal. Reaching the target completes the goal and any
    other positive amount puts it In Progress.
    """

    if status == GOAL_COMPLETED:
        return status
    if current_amount >= target_amount:
        return GOAL_COMPLETED
    if current_amount > 0:
        return GOAL_IN_PROGRESS
    return status


def list_goals(repo: GoalRepository, *, user_id: int) -> list[Goal]:
    """Return the user's goals, nearest target date first."""
    return repo.list_all(user_id=user_id)


def create_goal(repo: GoalRepository, *, user_id: int, fields: Mapping[str, Any]) -> Goal:
    values = dict(fields)
    values.setdefault("start_date", datetime.now())
    values.setdefault("current_amount", 0.0)
    values["status"] = next_status(
        values.get("status", GOAL_NOT_STARTED),
        current_amount=values["current_amount"],
        target_amount=values["target_amount"],
    )
    goal = repo.create(Goal(**values), user_id=user_id)
    logger.info("Goal created", extra={"user_id": user_id, "goal_id": goal.id})
    return goal


def get_goal(repo: GoalRepository, goal_id: int, *, user_id: int) -> Goal:
    return ownership.fetch_owned(repo, goal_id, user_id=user_id, label=LABEL)


def update_goal(
    repo: GoalRepository, goal_id: int, *, user_id: int, changes: Mapping[str, Any]
) -> Goal:
    """Partial update; amount changes re-derive the status unless one is given."""

    current = ownership.fetch_owned(repo, goal_id, user_id=user_id, label=LABEL)
    values = dict(changes)
    if "status" not in values and ({"current_amount", "target_amount"} & values.keys()):
        values["status"] = next_status(
            current.status,
            current_amount=values.get("current_amount", current.current_amount),
            target_amount=values.get("target_amount", current.target_amount),
        )
    return ownership.update_owned(repo, goal_id, user_id=user_id, changes=values, label=LABEL)


def delete_goal(repo: GoalRepository, goal_id: int, *, user_id: int) -> None:
    ownership.delete_owned(repo, goal_id, user_id=user_id, label=LABEL)
    logger.info("Goal deleted", extra={"user_id": user_id, "goal_id": goal_id})


def update_goal_progress(
    repo: GoalRepository, goal_id: int, *, user_id: int, current_amount: float
) -> Goal:
    """Record a new saved amount and advance the status accordingly."""

    if current_amount < 0:
        raise ValidationError.single("currentAmount", "Current amount cannot be negative.")

    goal = ownership.fetch_owned(repo, goal_id, user_id=user_id, label=LABEL)
    status = next_status(
        goal.status, current_amount=current_amount, target_amount=goal.target_amount
    )
    updated = ownership.update_owned(
        repo,
        goal_id,
        user_id=user_id,
        changes={"current_amount": current_amount, "status": status},
        label=LABEL,
    )
    if status != goal.status:
        logger.info(
            "Goal status changed",
            extra={"goal_id": goal_id, "from_status": goal.status, "to_status": status},
        )
    return updated
