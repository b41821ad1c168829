"""Administrator overrides of translated messages.

The setting value is a document of the form::

    enabled: "true"
    custom_messages:
      en:
        label_issue: Ticket
      fr:
        date:
          formats:
            default: "%d/%m/%Y"

``custom_messages`` is keyed by language. Every change goes through
``save()``, which refuses to write when validation finds a problem, so the
stored row always holds the last accepted overrides.
"""
import logging

import yaml
from flask import current_app, has_app_context

from message_customize.catalog import get_catalog, reload_translations
from message_customize.errors import (INVALID_FORMAT, PARSE_FAILURE, UNAVAILABLE_KEY,
                                      UNAVAILABLE_LANGUAGE, ValidationError)
from message_customize.message_tree import (RawPending, flatten_hash, is_blank, is_node,
                                            nested_hash)
from message_customize.models.setting import Setting
from message_customize.translations import get_translator

logger = logging.getLogger(__name__)

DEFAULT_SETTING_NAME = "plugin_message_customize"


def apply_override(tree, language, subtree):
    """Replace ``language``'s subtree, or drop it when ``subtree`` is empty.

    Returns a new dict; a ``tree`` that is not a mapping counts as empty.
    """
    messages = dict(tree) if is_node(tree) else {}
    if subtree:
        messages[language] = subtree
    else:
        messages.pop(language, None)
    return messages


class CustomMessageSetting(Setting):
    def __init__(self, name=DEFAULT_SETTING_NAME, value=None, id=None, updated_on=None,
                 catalog=None, base_language="en", language="en"):
        super().__init__(name, value=value, id=id, updated_on=updated_on)
        self._catalog = catalog
        self.base_language = base_language
        # Language of the error messages
        self.language = language
        self._pending_errors = []

    @staticmethod
    def default_value():
        return {"enabled": "true", "custom_messages": {}}

    @classmethod
    def find_or_default(cls, name=None, **kwargs):
        if has_app_context():
            name = name or current_app.config["SETTING_NAME"]
            kwargs.setdefault("base_language", current_app.config["BASE_LANGUAGE"])
        return super().find_or_default(name or DEFAULT_SETTING_NAME, **kwargs)

    @property
    def catalog(self):
        if self._catalog is None:
            self._catalog = get_catalog()
        return self._catalog

    def enabled(self):
        return self.value.get("enabled") != "false"

    def custom_messages(self, lang=None, check_enabled=False):
        messages = self.value.get("custom_messages")
        if lang:
            language = self.catalog.find_language(lang)
            messages = messages.get(language) if is_node(messages) else None

        if is_blank(messages) or (check_enabled and not self.enabled()):
            return {}
        return messages

    def custom_messages_to_flatten_hash(self, lang=None):
        messages = self.custom_messages(lang)
        return flatten_hash(messages) if is_node(messages) else {}

    def custom_messages_to_yaml(self):
        messages = self.custom_messages()
        if is_blank(messages):
            return ""
        if is_node(messages):
            return yaml.safe_dump(messages, allow_unicode=True,
                                  default_flow_style=False, sort_keys=False)
        if isinstance(messages, RawPending):
            return messages.text
        return str(messages)

    def update_with_custom_messages(self, custom_messages, lang):
        value = nested_hash(custom_messages)
        messages = apply_override(self.custom_messages(), lang, value)
        self.value = dict(self.value, custom_messages=messages)
        return self.save()

    def update_with_custom_messages_yaml(self, text):
        self._pending_errors = []
        try:
            messages = yaml.safe_load(text)
        except yaml.YAMLError as e:
            self._pending_errors.append(ValidationError("base", str(e), PARSE_FAILURE))
            messages = RawPending(text, str(e))
        else:
            if not is_node(messages) and not is_blank(messages):
                self._pending_errors.append(ValidationError(
                    "base", self._t("error_invalid_yaml_format"), INVALID_FORMAT))
            if is_blank(messages):
                messages = {}

        self.value = dict(self.value, custom_messages=messages)
        return self.save()

    def toggle_enabled(self, fallback_language=None):
        self.value = dict(self.value, enabled=str(not self.enabled()).lower())
        saved = self.save()
        if saved:
            logger.info("Custom messages %s", "enabled" if self.enabled() else "disabled")
            reload_translations(self.catalog, self.using_languages(fallback_language))
        return saved

    def using_languages(self, fallback_language=None):
        messages = self.custom_messages()
        if is_node(messages):
            return [str(language) for language in messages]
        return [fallback_language or self.language]

    def available_messages(self, lang):
        language = self.catalog.find_language(lang)
        messages = self.catalog.base_translations_for(language) if language else None
        if messages is None:
            reload_translations(self.catalog, [lang])
            messages = self.catalog.base_translations_for(str(lang)) or {}
        return flatten_hash(messages)

    def validate(self):
        # Errors recorded while reading bulk text win over everything else
        if self._pending_errors:
            errors, self._pending_errors = self._pending_errors, []
            return errors

        messages = self.value.get("custom_messages")
        try:
            yaml.safe_dump(messages)
        except yaml.YAMLError as e:
            return [ValidationError("base", f"{self._t('error_invalid_yaml_format')} ({e})",
                                    INVALID_FORMAT)]

        if not is_node(messages):
            return []
        return (self._language_value_errors(messages)
                + self._unavailable_language_errors(messages)
                + self._unavailable_key_errors(messages))

    def _language_value_errors(self, messages):
        invalid = [str(language) for language, subtree in messages.items()
                   if subtree is not None and not is_node(subtree)]
        if not invalid:
            return []
        message = f"{self._t('error_invalid_yaml_format')} [{', '.join(invalid)}]"
        return [ValidationError("base", message, INVALID_FORMAT)]

    def _unavailable_language_errors(self, messages):
        available = self.catalog.available_languages()
        unavailable = [str(language) for language in messages
                       if language is not None and str(language) not in available]
        if not unavailable:
            return []
        message = f"{self._t('error_unavailable_languages')} [{', '.join(unavailable)}]"
        return [ValidationError("base", message, UNAVAILABLE_LANGUAGE)]

    def _unavailable_key_errors(self, messages):
        used = {}
        for subtree in messages.values():
            if is_node(subtree):
                used.update(flatten_hash(subtree))

        available = set(self.available_messages(self.base_language))
        unavailable = [str(key) for key in used if str(key) not in available]
        if not unavailable:
            return []
        message = f"{self._t('error_unavailable_keys')} keys: [{', '.join(unavailable)}]"
        return [ValidationError("base", message, UNAVAILABLE_KEY)]

    def _t(self, key, **kwargs):
        return get_translator(self.language, self.catalog, self.base_language)(key, **kwargs)
