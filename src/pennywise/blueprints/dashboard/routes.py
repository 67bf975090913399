"""Dashboard routes."""

from __future__ import annotations

from ...extensions import get_services
from ...security import current_identity, login_required
from ...serializers import serialize_many
from ...services.dashboard import load_dashboard_summary
from ..common import respond
from . import bp


@bp.get("")
@login_required
def summary():
    """Balance, this month's totals, recent activity, and spending by category."""

    data = load_dashboard_summary(get_services().transaction_repo, user_id=current_identity().id)
    data["recentTransactions"] = serialize_many(data["recentTransactions"])
    return respond(data)
