import re

from flask_wtf import FlaskForm
from wtforms import HiddenField, StringField, SubmitField, TextAreaField
from wtforms.validators import DataRequired

TABS = ("normal", "yaml")

# Per-language overrides are posted as custom_messages[<dotted.key>]=<value>
CUSTOM_MESSAGE_FIELD = re.compile(r"^custom_messages\[(?P<key>[^\]]+)\]$")


class CustomMessagesForm(FlaskForm):
    """Overrides of one language, edited key by key."""
    tab = HiddenField(default="normal")
    lang = StringField("Language", validators=[DataRequired()])
    submit = SubmitField("Save")

    def custom_messages(self, formdata):
        messages = {}
        for field, value in formdata.items():
            match = CUSTOM_MESSAGE_FIELD.match(field)
            # A cleared field drops the key from the language's overrides
            if match and match.group("key").strip() and value.strip():
                messages[match.group("key").strip()] = value

        # Row added from the key picker
        new_key = (formdata.get("new_key") or "").strip()
        if new_key and formdata.get("new_value"):
            messages[new_key] = formdata.get("new_value")
        return messages


class CustomMessagesYamlForm(FlaskForm):
    """All overrides at once, as YAML text keyed by language."""
    tab = HiddenField(default="yaml")
    custom_messages_yaml = TextAreaField("Custom messages (YAML)")
    submit = SubmitField("Save")


class ToggleEnabledForm(FlaskForm):
    submit = SubmitField("Toggle")
