"""Budget routes."""

from __future__ import annotations

from ...extensions import get_services
from ...security import current_identity, login_required
from ...serializers import serialize_budget, serialize_budget_progress, serialize_many
from ...services import budgeting
from ..common import json_body, respond
from . import bp
from .forms import BudgetForm


@bp.get("")
@login_required
def list_budgets():
    budgets = budgeting.list_budgets(get_services().budget_repo, user_id=current_identity().id)
    return respond(serialize_many(budgets))


@bp.post("")
@login_required
def create_budget():
    fields = BudgetForm.from_mapping(json_body()).validated()
    budget = budgeting.create_budget(
        get_services().budget_repo, user_id=current_identity().id, fields=fields
    )
    return respond(serialize_budget(budget), status=201)


@bp.get("/stats")
@login_required
def budget_stats():
    """Total budgeted amount and count per category."""

    stats = budgeting.budget_stats(get_services().budget_repo, user_id=current_identity().id)
    return respond(stats)


@bp.get("/<int:budget_id>")
@login_required
def get_budget(budget_id: int):
    budget = budgeting.get_budget(
        get_services().budget_repo, budget_id, user_id=current_identity().id
    )
    return respond(serialize_budget(budget))


@bp.put("/<int:budget_id>")
@login_required
def update_budget(budget_id: int):
    changes = BudgetForm.from_mapping(json_body(), partial=True).validated()
    budget = budgeting.update_budget(
        get_services().budget_repo, budget_id, user_id=current_identity().id, changes=changes
    )
    return respond(serialize_budget(budget))


@bp.delete("/<int:budget_id>")
@login_required
def delete_budget(budget_id: int):
    budgeting.delete_budget(get_services().budget_repo, budget_id, user_id=current_identity().id)
    return respond(message="Budget removed")


@bp.get("/<int:budget_id>/progress")
@login_required
def budget_progress(budget_id: int):
    """Spending so far in the budget's current period."""

    services = get_services()
    progress = budgeting.budget_progress(
        services.budget_repo,
        services.transaction_repo,
        budget_id,
        user_id=current_identity().id,
    )
    return respond(serialize_budget_progress(progress))
