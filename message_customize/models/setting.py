"""Key-value store for named settings.

Each setting is one row of the ``settings`` table whose ``value`` column holds
a YAML document. Subclasses add validation by overriding :meth:`validate`;
:meth:`save` writes nothing unless validation returns no errors.
"""
import logging

import yaml

from message_customize.models.database import get_db, query_db

logger = logging.getLogger(__name__)


class Setting:
    def __init__(self, name, value=None, id=None, updated_on=None):
        self.name = name
        self.value = value if value is not None else self.default_value()
        self.id = id
        self.updated_on = updated_on
        self.errors = []

    @property
    def exists(self):
        return self.id is not None

    @staticmethod
    def default_value():
        return {}

    @classmethod
    def from_row(cls, row, **kwargs):
        value = yaml.safe_load(row["value"] or "")
        if not isinstance(value, dict):
            value = None
        return cls(row["name"], value=value, id=row["id"],
                   updated_on=row["updated_on"], **kwargs)

    @classmethod
    def find_or_default(cls, name, **kwargs):
        row = query_db("SELECT * FROM settings WHERE name = ?", (name,), one=True)
        if row is None:
            return cls(name, **kwargs)
        return cls.from_row(row, **kwargs)

    def validate(self):
        return []

    def save(self):
        self.errors = self.validate()
        if self.errors:
            logger.warning("Setting %s not saved: %s", self.name,
                           "; ".join(error.message for error in self.errors))
            return False

        document = yaml.safe_dump(self.value, allow_unicode=True,
                                  default_flow_style=False, sort_keys=False)
        db = get_db()
        if self.exists:
            db.execute(
                "UPDATE settings SET value = ?, updated_on = CURRENT_TIMESTAMP "
                "WHERE id = ?",
                (document, self.id),
            )
        else:
            cursor = db.execute(
                "INSERT INTO settings (name, value) VALUES (?, ?)",
                (self.name, document),
            )
            self.id = cursor.lastrowid
        db.commit()
        return True
