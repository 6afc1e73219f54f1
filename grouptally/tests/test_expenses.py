"""
Tests for expense endpoints and share calculation.
"""
import pytest
from decimal import Decimal

from grouptally.core.exceptions import InvalidSplitError
from grouptally.services.expense_service import calculate_shares


def share_map(expense):
    return {s["display_name"]: Decimal(s["amount"]) for s in expense["shares"]}


def test_equal_split_among_all_members(client, trio):
    group, alice, bob, carol = trio
    response = client.post(
        f"/api/groups/{group.id}/expenses",
        json={"name": "Groceries", "amount": "100", "paid_by": bob.id, "category": "food"}
    )
    assert response.status_code == 201
    expense = response.json()
    assert expense["paid_by_name"] == "Bob"
    assert expense["category"] == "food"
    assert share_map(expense) == {
        "Alice": Decimal("33.34"), "Bob": Decimal("33.33"), "Carol": Decimal("33.33")
    }


def test_equal_split_among_selected(client, trio):
    group, alice, bob, carol = trio
    expense = client.post(
        f"/api/groups/{group.id}/expenses",
        json={
            "name": "Cab", "amount": "45.50", "paid_by": carol.id,
            "participant_ids": [bob.id, carol.id]
        }
    ).json()
    assert share_map(expense) == {"Bob": Decimal("22.75"), "Carol": Decimal("22.75")}
    assert expense["category"] == "other"


def test_custom_split(client, trio):
    group, alice, bob, carol = trio
    expense = client.post(
        f"/api/groups/{group.id}/expenses",
        json={
            "name": "Tickets", "amount": "70", "paid_by": alice.id,
            "shares": [
                {"member_id": bob.id, "amount": "50"},
                {"member_id": carol.id, "amount": "20"}
            ]
        }
    ).json()
    assert share_map(expense) == {"Bob": Decimal("50"), "Carol": Decimal("20")}


def test_payer_outside_group_rejected(client, trio):
    group = trio[0]
    response = client.post(
        f"/api/groups/{group.id}/expenses",
        json={"name": "Lunch", "amount": "10", "paid_by": 999}
    )
    assert response.status_code == 422
    assert "Payer" in response.json()["error"]


def test_participants_and_shares_are_exclusive(client, trio):
    group, alice, bob, carol = trio
    response = client.post(
        f"/api/groups/{group.id}/expenses",
        json={
            "name": "Lunch", "amount": "10", "paid_by": alice.id,
            "participant_ids": [bob.id],
            "shares": [{"member_id": bob.id, "amount": "10"}]
        }
    )
    assert response.status_code == 422


def test_non_positive_amount_rejected(client, trio):
    group, alice, bob, carol = trio
    response = client.post(
        f"/api/groups/{group.id}/expenses",
        json={"name": "Nothing", "amount": "0", "paid_by": alice.id}
    )
    assert response.status_code == 422


def test_list_and_delete_expense(client, trio):
    group, alice, bob, carol = trio
    first = client.post(
        f"/api/groups/{group.id}/expenses",
        json={"name": "Breakfast", "amount": "30", "paid_by": alice.id, "date": "2024-03-01"}
    ).json()
    second = client.post(
        f"/api/groups/{group.id}/expenses",
        json={"name": "Dinner", "amount": "60", "paid_by": bob.id, "date": "2024-03-02"}
    ).json()

    listed = client.get(f"/api/groups/{group.id}/expenses").json()
    assert [e["id"] for e in listed] == [second["id"], first["id"]]

    assert client.delete(f"/api/expenses/{second['id']}").status_code == 200
    assert client.get(f"/api/expenses/{second['id']}").status_code == 404

    balances = client.get(f"/api/groups/{group.id}/balances").json()
    assert Decimal(balances["total_expense"]) == Decimal("30")
    assert {b["display_name"]: Decimal(b["balance"]) for b in balances["balances"]} == {
        "Alice": Decimal("20"), "Bob": Decimal("-10"), "Carol": Decimal("-10")
    }


def test_calculate_shares_rejects_strangers():
    with pytest.raises(InvalidSplitError):
        calculate_shares(Decimal("10"), [1, 2], participant_ids=[3])


def test_calculate_shares_rejects_negative_custom_share():
    with pytest.raises(InvalidSplitError):
        calculate_shares(Decimal("10"), [1, 2], custom_shares=[(1, Decimal("-5"))])


def test_calculate_shares_rejects_repeated_member():
    with pytest.raises(InvalidSplitError):
        calculate_shares(Decimal("10"), [1, 2], custom_shares=[(1, Decimal("5")), (1, Decimal("5"))])


def test_explicit_date_is_kept(client, trio):
    group, alice, bob, carol = trio
    response = client.post(
        f"/api/groups/{group.id}/expenses",
        json={"name": "Dinner", "amount": "10.00", "paid_by": alice.id, "date": "2024-05-01"}
    )
    assert response.status_code == 201, response.text
    assert response.json()["date"] == "2024-05-01"

    fetched = client.get(f"/api/expenses/{response.json()['id']}").json()
    assert fetched["date"] == "2024-05-01"
