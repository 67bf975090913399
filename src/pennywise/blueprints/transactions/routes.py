"""Transaction routes."""

from __future__ import annotations

from flask import request

from ...constants.categories import TRANSACTION_TYPES
from ...errors import ValidationError
from ...extensions import get_services
from ...security import current_identity, login_required
from ...serializers import serialize_many, serialize_transaction
from ...services import transactions as transaction_service
from ..common import json_body, respond
from ..forms import parse_datetime
from . import bp
from .forms import TransactionForm


def _filters_from_query() -> transaction_service.TransactionFilters:
    """Build listing filters from ``type``, ``category``, ``start``, and ``end``."""

    args = request.args
    filters = transaction_service.TransactionFilters(
        txn_type=args.get("type") or None,
        category=args.get("category") or None,
    )
    if filters.txn_type and filters.txn_type not in TRANSACTION_TYPES:
        raise ValidationError.single("type", "Type must be income or expense.")
    for key, attr in (("start", "start_date"), ("end", "end_date")):
        raw = args.get(key)
        if not raw:
            continue
        try:
            value = parse_datetime(raw)
        except ValueError:
            raise ValidationError.single(key, "Enter a valid date (YYYY-MM-DD).") from None
        if key == "end" and len(raw.strip()) == 10:
            # A bare end date includes that whole day.
            value = value.replace(hour=23, minute=59, second=59, microsecond=999999)
        setattr(filters, attr, value)
    return filters


@bp.get("")
@login_required
def list_transactions():
    """List the user's transactions, newest first, with optional filters."""

    txns = transaction_service.list_transactions(
        get_services().transaction_repo,
        user_id=current_identity().id,
        filters=_filters_from_query(),
    )
    return respond(serialize_many(txns))


@bp.post("")
@login_required
def create_transaction():
    fields = TransactionForm.from_mapping(json_body()).validated()
    txn = transaction_service.create_transaction(
        get_services().transaction_repo, user_id=current_identity().id, fields=fields
    )
    return respond(serialize_transaction(txn), status=201)


@bp.get("/stats/monthly")
@login_required
def monthly_stats():
    stats = transaction_service.monthly_stats(
        get_services().transaction_repo, user_id=current_identity().id
    )
    return respond(stats)


@bp.get("/<int:transaction_id>")
@login_required
def get_transaction(transaction_id: int):
    txn = transaction_service.get_transaction(
        get_services().transaction_repo, transaction_id, user_id=current_identity().id
    )
    return respond(serialize_transaction(txn))


@bp.put("/<int:transaction_id>")
@login_required
def update_transaction(transaction_id: int):
    changes = TransactionForm.from_mapping(json_body(), partial=True).validated()
    txn = transaction_service.update_transaction(
        get_services().transaction_repo,
        transaction_id,
        user_id=current_identity().id,
        changes=changes,
    )
    return respond(serialize_transaction(txn))


@bp.delete("/<int:transaction_id>")
@login_required
def delete_transaction(transaction_id: int):
    transaction_service.delete_transaction(
        get_services().transaction_repo, transaction_id, user_id=current_identity().id
    )
    return respond(message="Transaction removed")
