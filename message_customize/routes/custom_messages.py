import logging

from flask import (Blueprint, render_template, redirect, url_for, flash, request,
                   abort, session, current_app)
from flask_login import login_required, current_user

from message_customize.catalog import get_catalog, reload_translations
from message_customize.forms.custom_message_forms import (TABS, CustomMessagesForm,
                                                          CustomMessagesYamlForm,
                                                          ToggleEnabledForm)
from message_customize.models.custom_message_setting import CustomMessageSetting
from message_customize.translations import get_translator

logger = logging.getLogger(__name__)

custom_messages_bp = Blueprint("custom_messages", __name__)


@custom_messages_bp.before_request
@login_required
def require_admin():
    if not current_user.is_admin:
        abort(403)


def current_language():
    return (session.get("lang") or current_user.language
            or current_app.config["DEFAULT_LANGUAGE"])


def find_setting():
    return CustomMessageSetting.find_or_default(language=current_language())


def render_edit(setting, lang, tab):
    return render_template(
        "custom_messages/edit.html",
        setting=setting,
        lang=lang,
        tab=tab,
        languages=get_catalog().available_languages(),
        flatten_messages=setting.custom_messages_to_flatten_hash(lang),
        available_messages=setting.available_messages(lang),
        messages_form=CustomMessagesForm(data={"lang": lang}),
        yaml_form=CustomMessagesYamlForm(
            data={"custom_messages_yaml": setting.custom_messages_to_yaml()}),
        toggle_form=ToggleEnabledForm(),
    )


def requested_tab(values):
    tab = values.get("tab", "normal")
    return tab if tab in TABS else "normal"


@custom_messages_bp.route("/")
def edit():
    catalog = get_catalog()
    lang = catalog.find_language(request.args.get("lang")) or current_language()
    return render_edit(find_setting(), lang, requested_tab(request.args))


@custom_messages_bp.route("/", methods=["POST"])
def update():
    t = get_translator(current_language())
    catalog = get_catalog()
    setting = find_setting()
    tab = requested_tab(request.form)
    lang = catalog.find_language(request.form.get("lang")) or current_language()
    languages = setting.using_languages(lang)

    if tab == "yaml":
        form = CustomMessagesYamlForm()
        setting.update_with_custom_messages_yaml(form.custom_messages_yaml.data or "")
    else:
        form = CustomMessagesForm()
        if not form.validate_on_submit():
            abort(400)
        lang = form.lang.data
        setting.update_with_custom_messages(form.custom_messages(request.form), lang)

    if setting.errors:
        return render_edit(setting, catalog.find_language(lang) or current_language(), tab)

    logger.info("Custom messages updated by %s", current_user.username)
    reload_translations(catalog, languages + setting.using_languages(lang))
    flash(t("notice_successful_update"), "success")
    return redirect(url_for("custom_messages.edit", tab=tab, lang=lang))


@custom_messages_bp.route("/toggle", methods=["POST"])
def toggle_enabled():
    setting = find_setting()
    if setting.toggle_enabled(current_language()):
        t = get_translator(current_language())
        if setting.enabled():
            flash(t("notice_enabled_customize"), "success")
        else:
            flash(t("notice_disabled_customize"), "success")
        return redirect(url_for("custom_messages.edit"))
    return render_edit(setting, current_language(), "normal")
