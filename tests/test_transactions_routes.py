"""Transaction CRUD, ownership, filters, and monthly stats over HTTP."""

from __future__ import annotations

from datetime import datetime

import pytest

from pennywise.constants.categories import EXPENSE_CATEGORIES, INCOME_CATEGORIES

VALID_PAIRS = [("income", c) for c in INCOME_CATEGORIES] + [
    ("expense", c) for c in EXPENSE_CATEGORIES
]


def _txn(**overrides):
    body = {
        "type": "expense",
        "amount": 42.5,
        "category": "Food",
        "description": "Groceries",
        "date": "2024-03-02",
    }
    body.update(overrides)
    return body


@pytest.mark.parametrize(("txn_type", "category"), VALID_PAIRS)
def test_every_valid_type_category_pair_creates(client, user_headers, txn_type, category):
    response = client.post(
        "/api/transactions", json=_txn(type=txn_type, category=category), headers=user_headers
    )

    assert response.status_code == 201
    data = response.get_json()["data"]
    assert data["type"] == txn_type
    assert data["category"] == category


@pytest.mark.parametrize(
    ("txn_type", "category"),
    [("income", "Food"), ("income", "Housing"), ("expense", "Salary"), ("expense", "Bogus")],
)
def test_category_outside_type_set_is_rejected(client, user_headers, txn_type, category):
    response = client.post(
        "/api/transactions", json=_txn(type=txn_type, category=category), headers=user_headers
    )

    assert response.status_code == 400
    assert "category" in response.get_json()["errors"]


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("amount", -1),
        ("amount", "lots"),
        ("amount", True),
        ("amount", 10**400),
        ("type", "transfer"),
        ("description", ""),
    ],
)
def test_invalid_fields_are_rejected(client, user_headers, field, value):
    response = client.post("/api/transactions", json=_txn(**{field: value}), headers=user_headers)

    assert response.status_code == 400
    assert field in response.get_json()["errors"]


def test_create_then_get_round_trips(client, user_headers):
    created = client.post(
        "/api/transactions",
        json=_txn(
            amount=19.99,
            category="Entertainment",
            description="Cinema",
            date="2024-05-17T20:15:00",
            tags=["fun", " fun ", "weekend", ""],
            currency="eur",
            exchangeRate=1.1,
        ),
        headers=user_headers,
    ).get_json()["data"]

    response = client.get(f"/api/transactions/{created['id']}", headers=user_headers)

    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data == created
    assert data["amount"] == 19.99
    assert data["category"] == "Entertainment"
    assert data["description"] == "Cinema"
    assert data["date"] == "2024-05-17T20:15:00"
    assert data["tags"] == ["fun", "weekend"]
    assert data["currency"] == "EUR"
    assert data["exchangeRate"] == 1.1
    assert data["isRecurring"] is False


def test_date_defaults_to_now(client, user_headers):
    body = _txn()
    del body["date"]
    before = datetime.now().replace(microsecond=0)

    data = client.post("/api/transactions", json=body, headers=user_headers).get_json()["data"]

    assert datetime.fromisoformat(data["date"]) >= before


def test_recurring_requires_pattern_and_end_date(client, user_headers):
    response = client.post(
        "/api/transactions", json=_txn(isRecurring=True), headers=user_headers
    )

    assert response.status_code == 400
    assert set(response.get_json()["errors"]) == {"recurringPattern", "recurringEndDate"}

    ok = client.post(
        "/api/transactions",
        json=_txn(isRecurring=True, recurringPattern="monthly", recurringEndDate="2025-01-01"),
        headers=user_headers,
    )
    assert ok.status_code == 201


def test_list_is_newest_first(client, user_headers):
    for day in ("2024-01-05", "2024-03-01", "2024-02-10"):
        client.post("/api/transactions", json=_txn(date=day), headers=user_headers)

    body = client.get("/api/transactions", headers=user_headers).get_json()

    assert body["count"] == 3
    assert [t["date"][:10] for t in body["data"]] == ["2024-03-01", "2024-02-10", "2024-01-05"]


def test_list_only_shows_own_transactions(client, make_user):
    mine, _ = make_user()
    theirs, _ = make_user()
    client.post("/api/transactions", json=_txn(), headers=theirs)

    body = client.get("/api/transactions", headers=mine).get_json()

    assert body["count"] == 0
    assert body["data"] == []


def test_list_filters(client, user_headers):
    client.post("/api/transactions", json=_txn(date="2024-01-15"), headers=user_headers)
    client.post(
        "/api/transactions",
        json=_txn(type="income", category="Salary", amount=1000, date="2024-02-01"),
        headers=user_headers,
    )
    client.post("/api/transactions", json=_txn(date="2024-02-29"), headers=user_headers)

    income = client.get("/api/transactions?type=income", headers=user_headers).get_json()
    february = client.get(
        "/api/transactions?start=2024-02-01&end=2024-02-29", headers=user_headers
    ).get_json()
    food_feb = client.get(
        "/api/transactions?category=Food&start=2024-02-01", headers=user_headers
    ).get_json()

    assert [t["category"] for t in income["data"]] == ["Salary"]
    assert february["count"] == 2
    assert food_feb["count"] == 1
    assert client.get("/api/transactions?start=yesterday", headers=user_headers).status_code == 400


def test_update_is_partial(client, user_headers):
    created = client.post("/api/transactions", json=_txn(), headers=user_headers).get_json()["data"]

    response = client.put(
        f"/api/transactions/{created['id']}", json={"amount": 50}, headers=user_headers
    )

    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["amount"] == 50
    assert data["description"] == "Groceries"
    assert data["category"] == "Food"


def test_update_checks_merged_type_and_category(client, user_headers):
    created = client.post("/api/transactions", json=_txn(), headers=user_headers).get_json()["data"]

    mismatch = client.put(
        f"/api/transactions/{created['id']}", json={"type": "income"}, headers=user_headers
    )
    switched = client.put(
        f"/api/transactions/{created['id']}",
        json={"type": "income", "category": "Freelance"},
        headers=user_headers,
    )

    assert mismatch.status_code == 400
    assert "category" in mismatch.get_json()["errors"]
    assert switched.status_code == 200
    assert switched.get_json()["data"]["type"] == "income"


def test_non_owner_is_forbidden(client, make_user):
    owner, _ = make_user()
    intruder, _ = make_user()
    created = client.post("/api/transactions", json=_txn(), headers=owner).get_json()["data"]
    url = f"/api/transactions/{created['id']}"

    assert client.get(url, headers=intruder).status_code == 403
    assert client.put(url, json={"amount": 1}, headers=intruder).status_code == 403
    assert client.delete(url, headers=intruder).status_code == 403

    unchanged = client.get(url, headers=owner).get_json()["data"]
    assert unchanged["amount"] == 42.5


def test_owner_can_delete(client, user_headers):
    created = client.post("/api/transactions", json=_txn(), headers=user_headers).get_json()["data"]
    url = f"/api/transactions/{created['id']}"

    response = client.delete(url, headers=user_headers)

    assert response.status_code == 200
    assert response.get_json()["message"] == "Transaction removed"
    assert client.get(url, headers=user_headers).status_code == 404


def test_unknown_id_is_not_found(client, user_headers):
    for method in ("get", "put", "delete"):
        response = getattr(client, method)("/api/transactions/9999", json={}, headers=user_headers)
        assert response.status_code == 404
        assert response.get_json()["message"] == "Transaction not found"


def test_monthly_stats(client, user_headers):
    for body in (
        _txn(amount=10, date="2024-01-03"),
        _txn(amount=15, date="2024-01-20"),
        _txn(type="income", category="Salary", amount=900, date="2024-01-31"),
        _txn(amount=5, date="2024-02-01"),
    ):
        client.post("/api/transactions", json=body, headers=user_headers)

    body = client.get("/api/transactions/stats/monthly", headers=user_headers).get_json()

    assert body["data"] == [
        {"year": 2024, "month": 2, "type": "expense", "total": 5.0, "count": 1},
        {"year": 2024, "month": 1, "type": "expense", "total": 25.0, "count": 2},
        {"year": 2024, "month": 1, "type": "income", "total": 900.0, "count": 1},
    ]
