"""Budget periods, progress, stats, and CRUD."""

from __future__ import annotations

from datetime import datetime

import pytest

from pennywise.errors import ValidationError
from pennywise.infra.repositories import SQLModelBudgetRepository, SQLModelTransactionRepository
from pennywise.models import Budget, Transaction
from pennywise.services import budgeting

THURSDAY = datetime(2024, 3, 14, 15, 30, 45)


@pytest.mark.parametrize(
    ("period", "expected"),
    [
        ("daily", datetime(2024, 3, 14)),
        ("weekly", datetime(2024, 3, 10)),
        ("monthly", datetime(2024, 3, 1)),
        ("yearly", datetime(2024, 1, 1)),
    ],
)
def test_period_start(period, expected):
    assert budgeting.period_start(period, THURSDAY) == expected


def test_weekly_period_on_sunday_starts_that_day():
    assert budgeting.period_start("weekly", datetime(2024, 3, 10, 9, 0)) == datetime(2024, 3, 10)


def test_unknown_period_is_rejected():
    with pytest.raises(ValidationError):
        budgeting.period_start("fortnightly", THURSDAY)


@pytest.fixture()
def repos(session_factory):
    return SQLModelBudgetRepository(session_factory), SQLModelTransactionRepository(
        session_factory
    )


def _expense(repo, user_id, amount, category="Food", when=THURSDAY):
    return repo.create(
        Transaction(
            type="expense", amount=amount, category=category, description="x", occurred_at=when
        ),
        user_id=user_id,
    )


def test_progress_sums_matching_expenses_in_period(repos, owner_id, other_id):
    budgets, txns = repos
    budget = budgets.create(Budget(category="Food", amount=100), user_id=owner_id)
    _expense(txns, owner_id, 25, when=datetime(2024, 3, 2))
    _expense(txns, owner_id, 15, when=datetime(2024, 3, 14, 8))
    _expense(txns, owner_id, 70, category="Shopping")
    _expense(txns, owner_id, 99, when=datetime(2024, 2, 28))
    _expense(txns, other_id, 500)
    txns.create(
        Transaction(type="income", amount=1000, category="Other", description="x", occurred_at=THURSDAY),
        user_id=owner_id,
    )

    progress = budgeting.budget_progress(
        budgets, txns, budget.id, user_id=owner_id, now=THURSDAY
    )

    assert progress.spent == 40
    assert progress.remaining == 60
    assert progress.progress_percent == 40
    assert progress.period_start == datetime(2024, 3, 1)
    assert progress.period_end == THURSDAY
    assert progress.threshold_reached is False


def test_progress_flags_threshold(repos, owner_id):
    budgets, txns = repos
    budget = budgets.create(
        Budget(category="Food", amount=200, period="weekly", notification_threshold=75),
        user_id=owner_id,
    )
    _expense(txns, owner_id, 150, when=datetime(2024, 3, 11))

    progress = budgeting.budget_progress(budgets, txns, budget.id, user_id=owner_id, now=THURSDAY)

    assert progress.progress_percent == 75
    assert progress.threshold_reached is True


def test_progress_threshold_respects_disabled_notifications(repos, owner_id):
    budgets, txns = repos
    budget = budgets.create(
        Budget(category="Food", amount=10, notifications_enabled=False), user_id=owner_id
    )
    _expense(txns, owner_id, 50)

    progress = budgeting.budget_progress(budgets, txns, budget.id, user_id=owner_id, now=THURSDAY)

    assert progress.progress_percent == 500
    assert progress.remaining == -40
    assert progress.threshold_reached is False


def test_zero_budget_progress_is_a_validation_error(repos, owner_id):
    budgets, txns = repos
    budget = budgets.create(Budget(category="Food", amount=0), user_id=owner_id)

    with pytest.raises(ValidationError):
        budgeting.budget_progress(budgets, txns, budget.id, user_id=owner_id, now=THURSDAY)


def test_budget_stats_group_by_category(repos, owner_id, other_id):
    budgets, _ = repos
    budgets.create(Budget(category="Food", amount=100), user_id=owner_id)
    budgets.create(Budget(category="Food", amount=50, period="weekly"), user_id=owner_id)
    budgets.create(Budget(category="Housing", amount=900), user_id=owner_id)
    budgets.create(Budget(category="Food", amount=1), user_id=other_id)

    assert budgeting.budget_stats(budgets, user_id=owner_id) == [
        {"category": "Food", "totalAmount": 150.0, "count": 2},
        {"category": "Housing", "totalAmount": 900.0, "count": 1},
    ]


# HTTP ---------------------------------------------------------------------------


def test_progress_route(client, user_headers, create_record):
    budget = create_record("/api/budgets", user_headers, category="Food", amount=100)
    create_record(
        "/api/transactions",
        user_headers,
        type="expense",
        amount=40,
        category="Food",
        description="Groceries",
    )

    response = client.get(f"/api/budgets/{budget['id']}/progress", headers=user_headers)

    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["budgetAmount"] == 100
    assert data["spent"] == 40
    assert data["remaining"] == 60
    assert data["progressPercent"] == 40
    assert data["thresholdReached"] is False
    assert datetime.fromisoformat(data["periodStart"]).day == 1


def test_zero_budget_progress_route_is_400(client, user_headers, create_record):
    budget = create_record("/api/budgets", user_headers, category="Food", amount=0)

    response = client.get(f"/api/budgets/{budget['id']}/progress", headers=user_headers)

    assert response.status_code == 400
    assert "amount" in response.get_json()["errors"]


def test_budget_crud(client, user_headers, create_record):
    created = create_record(
        "/api/budgets", user_headers, category="Utilities", amount=120, period="monthly"
    )
    url = f"/api/budgets/{created['id']}"
    assert created["notificationsEnabled"] is True
    assert created["notificationThreshold"] == 80

    fetched = client.get(url, headers=user_headers).get_json()["data"]
    assert fetched == created

    updated = client.put(url, json={"amount": 150}, headers=user_headers).get_json()["data"]
    assert updated["amount"] == 150
    assert updated["category"] == "Utilities"

    assert client.delete(url, headers=user_headers).status_code == 200
    assert client.get(url, headers=user_headers).status_code == 404


def test_budget_validation(client, user_headers):
    bad_category = client.post(
        "/api/budgets", json={"category": "Salary", "amount": 10}, headers=user_headers
    )
    bad_period = client.post(
        "/api/budgets",
        json={"category": "Food", "amount": 10, "period": "hourly"},
        headers=user_headers,
    )
    bad_dates = client.post(
        "/api/budgets",
        json={
            "category": "Food",
            "amount": 10,
            "startDate": "2024-05-01",
            "endDate": "2024-04-01",
        },
        headers=user_headers,
    )

    assert bad_category.status_code == 400
    assert "category" in bad_category.get_json()["errors"]
    assert bad_period.status_code == 400
    assert bad_dates.status_code == 400
    assert "endDate" in bad_dates.get_json()["errors"]


def test_budget_list_newest_first_and_stats_route(client, user_headers, create_record):
    first = create_record("/api/budgets", user_headers, category="Food", amount=100)
    second = create_record("/api/budgets", user_headers, category="Housing", amount=800)

    listing = client.get("/api/budgets", headers=user_headers).get_json()
    stats = client.get("/api/budgets/stats", headers=user_headers).get_json()

    assert [b["id"] for b in listing["data"]] == [second["id"], first["id"]]
    assert stats["count"] == 2


def test_budget_non_owner_is_forbidden(client, make_user, create_record):
    owner, _ = make_user()
    intruder, _ = make_user()
    budget = create_record("/api/budgets", owner, category="Food", amount=100)
    url = f"/api/budgets/{budget['id']}"

    assert client.get(url, headers=intruder).status_code == 403
    assert client.get(f"{url}/progress", headers=intruder).status_code == 403
    assert client.put(url, json={"amount": 1}, headers=intruder).status_code == 403
    assert client.delete(url, headers=intruder).status_code == 403
