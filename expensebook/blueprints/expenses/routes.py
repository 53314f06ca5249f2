from flask import Blueprint, render_template, request, redirect, url_for, flash
from flask_login import login_required
from ...errors import CategoryNotFound, CategoryRequired, InvalidJSON, PayloadValidationError
from ...extensions import db
from ...services import CategoryService, ExpenseService
from .. import acting_user


expenses_bp = Blueprint("expenses", __name__, url_prefix="/user/expense")

FORM_FIELDS = ("label", "amount", "date", "category")
FORM_ERRORS = (InvalidJSON, PayloadValidationError, CategoryRequired, CategoryNotFound)


def _form_payload():
    return {k: request.form.get(k) for k in FORM_FIELDS if k in request.form}


def _flash_error(exc):
    details = getattr(exc, "details", None)
    if details:
        for detail in details:
            flash(f"{detail['field']}: {detail['message']}", "danger")
    else:
        flash(exc.description, "danger")


@expenses_bp.route("/")
@login_required
def list_expenses():
    expenses = ExpenseService(db.session).list(acting_user())
    return render_template("expenses/list.html", expenses=expenses)


@expenses_bp.route("/new", methods=["GET", "POST"])
@login_required
def create_expense():
    categories = CategoryService(db.session).list_names()
    if request.method == "POST":
        try:
            ExpenseService(db.session).create(acting_user(), _form_payload())
        except FORM_ERRORS as exc:
            _flash_error(exc)
            return render_template("expenses/form.html", categories=categories, values=request.form), 400
        flash("Expense added", "success")
        return redirect(url_for("expenses.list_expenses"))
    return render_template("expenses/form.html", categories=categories, values={})


@expenses_bp.route("/<int:expense_id>")
@login_required
def show_expense(expense_id):
    expense = ExpenseService(db.session).get(acting_user(), expense_id)
    return render_template("expenses/show.html", expense=expense)


@expenses_bp.route("/<int:expense_id>/edit", methods=["GET", "POST"])
@login_required
def edit_expense(expense_id):
    service = ExpenseService(db.session)
    exp = service.get(acting_user(), expense_id)
    categories = CategoryService(db.session).list_names()
    if request.method == "POST":
        try:
            service.update(acting_user(), exp.id, _form_payload())
        except FORM_ERRORS as exc:
            _flash_error(exc)
            return render_template("expenses/form.html", expense=exp, categories=categories, values=request.form), 400
        flash("Expense updated", "success")
        return redirect(url_for("expenses.list_expenses"), code=303)
    values = {
        "label": exp.label,
        "amount": exp.amount,
        "date": exp.date.isoformat(),
        "category": exp.category.name,
    }
    return render_template("expenses/form.html", expense=exp, categories=categories, values=values)


@expenses_bp.route("/<int:expense_id>/delete", methods=["POST"])
@login_required
def delete_expense(expense_id):
    ExpenseService(db.session).delete(acting_user(), expense_id)
    flash("Expense deleted", "info")
    return redirect(url_for("expenses.list_expenses"), code=303)
