"""JSON API for expenses: creation, listing, ownership and partial updates."""
from datetime import date

import pytest

from conftest import create_expense


class TestCreateExpense:
    def test_create_then_list_contains_expense(self, alice):
        resp = alice.post(
            "/api/expense",
            json={"label": "Lunch", "amount": 12.5, "date": "2024-01-15", "category": "Food"},
        )
        assert resp.status_code == 201
        assert resp.get_json()["message"] == "Expense created successfully"

        listed = alice.get("/api/expenses")
        assert listed.status_code == 200
        assert listed.get_json() == [
            {
                "id": resp.get_json()["id"],
                "label": "Lunch",
                "amount": 12.5,
                "date": "2024-01-15",
                "category": {"name": "Food"},
            }
        ]

    def test_missing_fields_fall_back_to_defaults(self, alice):
        """Label, amount and date are optional; only the category is required."""
        expense_id = create_expense(alice, label=None, amount=None, date=None)
        body = alice.get(f"/api/expense/{expense_id}").get_json()
        assert body["label"] == ""
        assert body["amount"] == 0
        assert body["date"] == date.today().isoformat()

    def test_numeric_string_amount_is_accepted(self, alice):
        expense_id = create_expense(alice, amount="42.10")
        assert alice.get(f"/api/expense/{expense_id}").get_json()["amount"] == 42.1

    def test_unknown_category_is_404(self, alice):
        resp = alice.post("/api/expense", json={"label": "x", "amount": 1, "category": "Yachts"})
        assert resp.status_code == 404
        assert resp.get_json() == {"error": "Category not found"}

    @pytest.mark.parametrize("category", ["Z" * 150, " Food ", "Food "])
    def test_category_lookup_is_exact(self, alice, category):
        resp = alice.post("/api/expense", json={"label": "x", "amount": 1, "category": category})
        assert resp.status_code == 404
        assert resp.get_json() == {"error": "Category not found"}

    def test_boolean_amount_is_rejected(self, alice):
        resp = alice.post("/api/expense", json={"amount": True, "category": "Food"})
        assert resp.status_code == 400
        assert resp.get_json()["details"][0]["field"] == "amount"

    @pytest.mark.parametrize("category", [None, ""])
    def test_missing_category_is_400(self, alice, category):
        payload = {"label": "x", "amount": 1}
        if category is not None:
            payload["category"] = category
        resp = alice.post("/api/expense", json=payload)
        assert resp.status_code == 400
        assert resp.get_json() == {"error": "Category is required"}

    def test_malformed_json_is_400(self, alice):
        resp = alice.post("/api/expense", data="{label: nope", content_type="application/json")
        assert resp.status_code == 400
        assert resp.get_json() == {"error": "Invalid JSON"}

    def test_empty_body_is_400(self, alice):
        resp = alice.post("/api/expense")
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Invalid JSON"

    def test_negative_amount_is_rejected(self, alice):
        resp = alice.post("/api/expense", json={"amount": -3, "category": "Food"})
        assert resp.status_code == 400
        body = resp.get_json()
        assert body["error"] == "Validation failed"
        assert [d["field"] for d in body["details"]] == ["amount"]

    @pytest.mark.parametrize("bad_date", ["2024-02-30", "yesterday", 1705276800, "1705276800", True])
    def test_invalid_date_is_rejected(self, alice, bad_date):
        resp = alice.post("/api/expense", json={"amount": 3, "date": bad_date, "category": "Food"})
        assert resp.status_code == 400
        assert resp.get_json()["details"][0]["field"] == "date"

    def test_nothing_is_stored_on_failure(self, alice):
        alice.post("/api/expense", json={"amount": 1, "category": "Yachts"})
        assert alice.get("/api/expenses").get_json() == []


class TestReadExpenses:
    def test_list_only_returns_own_expenses(self, alice, bob):
        mine = create_expense(alice, label="Rent", category="Housing")
        create_expense(bob, label="Bus", category="Transportation")
        assert [e["id"] for e in alice.get("/api/expenses").get_json()] == [mine]

    def test_list_keeps_insertion_order(self, alice):
        ids = [create_expense(alice, label=f"e{i}") for i in range(3)]
        assert [e["id"] for e in alice.get("/api/expenses").get_json()] == ids

    def test_get_missing_expense_is_404(self, alice):
        resp = alice.get("/api/expense/999")
        assert resp.status_code == 404
        assert resp.get_json() == {"error": "Expense not found"}


class TestOwnership:
    """Another user's expense is never readable or writable (403)."""

    def test_get_other_users_expense(self, alice, bob):
        expense_id = create_expense(alice)
        resp = bob.get(f"/api/expense/{expense_id}")
        assert resp.status_code == 403
        assert resp.get_json() == {"error": "Forbidden"}

    def test_update_other_users_expense(self, alice, bob):
        expense_id = create_expense(alice)
        resp = bob.put(f"/api/expense/{expense_id}", json={"label": "hijacked"})
        assert resp.status_code == 403
        assert alice.get(f"/api/expense/{expense_id}").get_json()["label"] == "Lunch"

    def test_delete_other_users_expense(self, alice, bob):
        expense_id = create_expense(alice)
        assert bob.delete(f"/api/expense/{expense_id}").status_code == 403
        assert alice.get(f"/api/expense/{expense_id}").status_code == 200


class TestUpdateExpense:
    def test_partial_update_keeps_other_fields(self, alice):
        expense_id = create_expense(alice)
        resp = alice.put(f"/api/expense/{expense_id}", json={"amount": 20})
        assert resp.status_code == 200
        assert resp.get_json() == {"message": "Expense updated successfully"}

        body = alice.get(f"/api/expense/{expense_id}").get_json()
        assert body["amount"] == 20
        assert body["label"] == "Lunch"
        assert body["date"] == "2024-01-15"
        assert body["category"] == {"name": "Food"}

    def test_update_all_fields(self, alice):
        expense_id = create_expense(alice)
        alice.put(
            f"/api/expense/{expense_id}",
            json={"label": "Taxi", "amount": 30.25, "date": "2024-03-01", "category": "Transportation"},
        )
        body = alice.get(f"/api/expense/{expense_id}").get_json()
        assert body == {
            "id": expense_id,
            "label": "Taxi",
            "amount": 30.25,
            "date": "2024-03-01",
            "category": {"name": "Transportation"},
        }

    def test_null_fields_are_ignored(self, alice):
        expense_id = create_expense(alice)
        alice.put(f"/api/expense/{expense_id}", json={"label": None, "date": "", "amount": 5})
        body = alice.get(f"/api/expense/{expense_id}").get_json()
        assert body["label"] == "Lunch"
        assert body["date"] == "2024-01-15"
        assert body["amount"] == 5

    def test_unknown_category_is_rejected_and_nothing_changes(self, alice):
        expense_id = create_expense(alice)
        resp = alice.put(f"/api/expense/{expense_id}", json={"label": "Dinner", "category": "Yachts"})
        assert resp.status_code == 404
        assert resp.get_json() == {"error": "Category not found"}
        body = alice.get(f"/api/expense/{expense_id}").get_json()
        assert body["label"] == "Lunch"
        assert body["category"] == {"name": "Food"}

    @pytest.mark.parametrize("category", ["Z" * 150, " Food "])
    def test_category_lookup_is_exact(self, alice, category):
        expense_id = create_expense(alice, category="Housing")
        resp = alice.put(f"/api/expense/{expense_id}", json={"category": category})
        assert resp.status_code == 404
        assert alice.get(f"/api/expense/{expense_id}").get_json()["category"] == {"name": "Housing"}

    def test_timestamp_date_is_rejected(self, alice):
        expense_id = create_expense(alice)
        assert alice.put(f"/api/expense/{expense_id}", json={"date": 1705276800}).status_code == 400
        assert alice.get(f"/api/expense/{expense_id}").get_json()["date"] == "2024-01-15"

    def test_malformed_json_is_400(self, alice):
        expense_id = create_expense(alice)
        resp = alice.put(f"/api/expense/{expense_id}", data="[oops", content_type="application/json")
        assert resp.status_code == 400

    def test_negative_amount_is_rejected(self, alice):
        expense_id = create_expense(alice)
        assert alice.put(f"/api/expense/{expense_id}", json={"amount": -1}).status_code == 400
        assert alice.get(f"/api/expense/{expense_id}").get_json()["amount"] == 12.5

    def test_update_missing_expense_is_404(self, alice):
        assert alice.put("/api/expense/999", json={"label": "x"}).status_code == 404


class TestDeleteExpense:
    def test_delete_then_get(self, alice):
        expense_id = create_expense(alice)
        resp = alice.delete(f"/api/expense/{expense_id}")
        assert resp.status_code == 200
        assert resp.get_json() == {"message": "Expense deleted"}

        assert alice.get(f"/api/expense/{expense_id}").status_code == 404
        assert alice.get("/api/expenses").get_json() == []

    def test_delete_missing_expense_is_404(self, alice):
        assert alice.delete("/api/expense/999").status_code == 404


class TestCategoriesEndpoint:
    def test_lists_seeded_category_names(self, alice):
        names = alice.get("/api/categories").get_json()
        assert names[0] == "Housing"
        assert "Food" in names
        assert len(names) == 11

    def test_requires_login(self, client):
        assert client.get("/api/categories").status_code == 401
