import logging

from flask import Flask, render_template, session, redirect, request
from flask_login import LoginManager
from flask_wtf.csrf import CSRFProtect

from message_customize import catalog
from message_customize.config import Config
from message_customize.models.custom_message_setting import CustomMessageSetting
from message_customize.models.database import init_app as init_db_app
from message_customize.models.user import User
from message_customize.translations import get_translator


def custom_messages_overlay(language):
    """Overrides merged into a language's table whenever it is (re)loaded."""
    setting = CustomMessageSetting.find_or_default()
    return setting.custom_messages(language, check_enabled=True)


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    # Extensions
    csrf = CSRFProtect(app)
    login_manager = LoginManager(app)
    login_manager.login_view = "auth.login"
    login_manager.login_message_category = "warning"

    @login_manager.user_loader
    def load_user(user_id):
        return User.get_by_id(int(user_id))

    # Database teardown
    init_db_app(app)

    catalog.init_app(app, overlay=custom_messages_overlay)

    # Template context - make translations available everywhere
    @app.context_processor
    def inject_globals():
        lang = session.get("lang", app.config["DEFAULT_LANGUAGE"])
        t = get_translator(lang, fallback_lang=app.config["DEFAULT_LANGUAGE"])
        return {
            "t": t,
            "lang": lang,
            "available_languages": catalog.get_catalog().available_languages(),
        }

    @app.route("/set-language/<lang>")
    def set_language(lang):
        language = catalog.get_catalog().find_language(lang)
        if language:
            session["lang"] = language
        return redirect(request.referrer or "/")

    @app.route("/")
    def index():
        return redirect("/admin/custom-messages/")

    # Blueprints
    from message_customize.routes.auth import auth_bp
    from message_customize.routes.custom_messages import custom_messages_bp
    from message_customize.routes.api import api_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(custom_messages_bp, url_prefix="/admin/custom-messages")
    app.register_blueprint(api_bp, url_prefix="/api")

    # Exempt API from CSRF
    csrf.exempt(api_bp)

    # Error handlers
    @app.errorhandler(403)
    def forbidden(e):
        return render_template("errors/403.html"), 403

    @app.errorhandler(404)
    def not_found(e):
        return render_template("errors/404.html"), 404

    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app = create_app()
    app.run(debug=True, use_reloader=False)
