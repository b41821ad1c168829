import logging

from flask import (Blueprint, render_template, redirect, url_for, flash, request, session,
                   current_app)
from flask_login import login_user, logout_user, login_required, current_user
from werkzeug.security import check_password_hash

from message_customize.forms.auth_forms import LoginForm
from message_customize.models.user import User
from message_customize.translations import get_translator

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/login", methods=["GET", "POST"])
def login():
    if current_user.is_authenticated:
        return redirect(url_for("custom_messages.edit"))

    t = get_translator(session.get("lang", current_app.config["DEFAULT_LANGUAGE"]))
    form = LoginForm()
    if form.validate_on_submit():
        user = User.get_by_username(form.username.data)
        if user and check_password_hash(user.password_hash, form.password.data):
            if not user.is_active:
                flash(t("flash_account_deactivated"), "danger")
                return render_template("auth/login.html", form=form)
            login_user(user)
            session.setdefault("lang", user.language)
            logger.info("User %s logged in from %s", user.username, request.remote_addr)
            next_page = request.args.get("next")
            return redirect(next_page or url_for("custom_messages.edit"))
        flash(t("flash_invalid_credentials"), "danger")

    return render_template("auth/login.html", form=form)


@auth_bp.route("/logout")
@login_required
def logout():
    t = get_translator(session.get("lang", current_app.config["DEFAULT_LANGUAGE"]))
    logout_user()
    flash(t("flash_logged_out"), "info")
    return redirect(url_for("auth.login"))
