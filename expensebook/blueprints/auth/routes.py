from flask import Blueprint, render_template, request, redirect, url_for, flash, jsonify, current_app
from flask_login import login_user, logout_user, current_user
from ...errors import EmailAlreadyRegistered, InvalidCredentials, InvalidJSON, PayloadValidationError
from ...extensions import db
from ...services import AuthService
from .. import safe_next, wants_json

auth_bp = Blueprint("auth", __name__)


def _payload():
    # Browser forms post urlencoded data, the SPA posts a JSON body
    if request.form:
        return request.form.to_dict()
    return request.get_json(force=True, silent=True)


@auth_bp.route("/register", methods=["GET", "POST"])
@auth_bp.route("/api/register", methods=["POST"])
def register():
    if request.method == "GET":
        return render_template("auth/register.html")
    try:
        user = AuthService(db.session).register(_payload())
    except (InvalidJSON, PayloadValidationError, EmailAlreadyRegistered) as exc:
        if wants_json():
            raise
        if getattr(exc, "details", None):
            for detail in exc.details:
                flash(f"{detail['field']}: {detail['message']}", "danger")
        else:
            flash(exc.description, "danger")
        return render_template("auth/register.html"), 400
    if wants_json():
        return jsonify(message="User registered successfully", id=user.id), 201
    flash("Registration successful. Please log in.", "success")
    return redirect(url_for("auth.login"))


@auth_bp.route("/login", methods=["GET", "POST"])
def login():
    if request.method == "GET":
        if current_user.is_authenticated:
            return redirect(url_for("expenses.list_expenses"))
        return render_template("auth/login.html")
    try:
        user, remember = AuthService(db.session).authenticate(_payload())
    except InvalidCredentials:
        if wants_json():
            raise
        flash("Invalid credentials", "danger")
        return render_template("auth/login.html"), 401
    login_user(user, remember=remember)
    current_app.logger.info("User id=%s logged in", user.id)
    if wants_json():
        return jsonify(message="Login successful", user={"id": user.id, "email": user.email, "roles": user.roles})
    flash("Logged in successfully", "success")
    return redirect(safe_next(request.args.get("next")) or url_for("expenses.list_expenses"))


@auth_bp.route("/logout", methods=["GET", "POST"])
def logout():
    logout_user()
    if wants_json():
        return jsonify(message="Logged out")
    flash("Logged out", "info")
    return redirect(url_for("auth.login"))
