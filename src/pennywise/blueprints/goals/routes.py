"""Goal routes."""

from __future__ import annotations

from ...extensions import get_services
from ...security import current_identity, login_required
from ...serializers import serialize_goal, serialize_many
from ...services import goals as goal_service
from ..common import json_body, respond
from . import bp
from .forms import GoalForm, GoalProgressForm


@bp.get("")
@login_required
def list_goals():
    goals = goal_service.list_goals(get_services().goal_repo, user_id=current_identity().id)
    return respond(serialize_many(goals))


@bp.post("")
@login_required
def create_goal():
    fields = GoalForm.from_mapping(json_body()).validated()
    goal = goal_service.create_goal(
        get_services().goal_repo, user_id=current_identity().id, fields=fields
    )
    return respond(serialize_goal(goal), status=201)


@bp.get("/<int:goal_id>")
@login_required
def get_goal(goal_id: int):
    goal = goal_service.get_goal(get_services().goal_repo, goal_id, user_id=current_identity().id)
    return respond(serialize_goal(goal))


@bp.put("/<int:goal_id>")
@login_required
def update_goal(goal_id: int):
    changes = GoalForm.from_mapping(json_body(), partial=True).validated()
    goal = goal_service.update_goal(
        get_services().goal_repo, goal_id, user_id=current_identity().id, changes=changes
    )
    return respond(serialize_goal(goal))


@bp.delete("/<int:goal_id>")
@login_required
def delete_goal(goal_id: int):
    goal_service.delete_goal(get_services().goal_repo, goal_id, user_id=current_identity().id)
    return respond(message="Goal removed")


@bp.put("/<int:goal_id>/progress")
@login_required
def update_goal_progress(goal_id: int):
    """Record the amount saved so far; status follows automatically."""

    data = GoalProgressForm.from_mapping(json_body()).validated()
    goal = goal_service.update_goal_progress(
        get_services().goal_repo,
        goal_id,
        user_id=current_identity().id,
        current_amount=data["current_amount"],
    )
    return respond(serialize_goal(goal))
