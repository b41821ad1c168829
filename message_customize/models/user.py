from flask_login import UserMixin

from message_customize.models.database import get_db, query_db


class User(UserMixin):
    def __init__(self, id, username, password_hash, role, language, is_active,
                 created_at):
        self.id = id
        self.username = username
        self.password_hash = password_hash
        self.role = role
        self.language = language
        self._is_active = is_active
        self.created_at = created_at

    @property
    def is_active(self):
        return bool(self._is_active)

    @property
    def is_admin(self):
        return self.role == "admin"

    @staticmethod
    def from_row(row):
        if row is None:
            return None
        return User(
            id=row["id"],
            username=row["username"],
            password_hash=row["password_hash"],
            role=row["role"],
            language=row["language"],
            is_active=row["is_active"],
            created_at=row["created_at"],
        )

    @staticmethod
    def get_by_id(user_id):
        row = query_db("SELECT * FROM users WHERE id = ?", (user_id,), one=True)
        return User.from_row(row)

    @staticmethod
    def get_by_username(username):
        row = query_db("SELECT * FROM users WHERE username = ?", (username,), one=True)
        return User.from_row(row)

    @staticmethod
    def create(username, password_hash, role="user", language="en"):
        db = get_db()
        cursor = db.execute(
            "INSERT INTO users (username, password_hash, role, language) "
            "VALUES (?, ?, ?, ?)",
            (username, password_hash, role, language),
        )
        db.commit()
        return cursor.lastrowid
