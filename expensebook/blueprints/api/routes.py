from flask import Blueprint, request, jsonify
from flask_login import login_required
from ...extensions import db
from ...schemas import ExpenseOut
from ...services import CategoryService, ExpenseService
from .. import acting_user

api_bp = Blueprint("api", __name__, url_prefix="/api")


def _json_body():
    # None for a missing or malformed body; the service turns that into a 400
    return request.get_json(force=True, silent=True)


@api_bp.route("/expense", methods=["POST"])
@login_required
def create_expense():
    expense = ExpenseService(db.session).create(acting_user(), _json_body())
    return jsonify(message="Expense created successfully", id=expense.id), 201


@api_bp.route("/expenses", methods=["GET"])
@login_required
def list_expenses():
    expenses = ExpenseService(db.session).list(acting_user())
    return jsonify([ExpenseOut.dump(e) for e in expenses])


@api_bp.route("/expense/<int:expense_id>", methods=["GET"])
@login_required
def get_expense(expense_id):
    expense = ExpenseService(db.session).get(acting_user(), expense_id)
    return jsonify(ExpenseOut.dump(expense))


@api_bp.route("/expense/<int:expense_id>", methods=["PUT"])
@login_required
def update_expense(expense_id):
    ExpenseService(db.session).update(acting_user(), expense_id, _json_body())
    return jsonify(message="Expense updated successfully")


@api_bp.route("/expense/<int:expense_id>", methods=["DELETE"])
@login_required
def delete_expense(expense_id):
    ExpenseService(db.session).delete(acting_user(), expense_id)
    return jsonify(message="Expense deleted")


@api_bp.route("/categories", methods=["GET"])
@login_required
def list_categories():
    return jsonify(CategoryService(db.session).list_names())
