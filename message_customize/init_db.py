import logging
import os
import sqlite3

from werkzeug.security import generate_password_hash

from message_customize.config import Config

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    username TEXT UNIQUE NOT NULL,
    password_hash TEXT NOT NULL,
    role TEXT NOT NULL DEFAULT 'user',
    language TEXT NOT NULL DEFAULT 'en',
    is_active INTEGER NOT NULL DEFAULT 1,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

-- Named plugin settings; value is a YAML document
CREATE TABLE IF NOT EXISTS settings (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT UNIQUE NOT NULL,
    value TEXT,
    updated_on TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""


def init_db(database=None):
    database = database or Config.DATABASE

    db = sqlite3.connect(database)
    db.executescript(SCHEMA)

    # Seed admin user if not exists
    cursor = db.execute("SELECT id FROM users WHERE username = 'admin'")
    if cursor.fetchone() is None:
        admin_password = os.environ.get("ADMIN_PASSWORD", "admin")
        db.execute(
            "INSERT INTO users (username, password_hash, role) VALUES (?, ?, ?)",
            ("admin", generate_password_hash(admin_password), "admin"),
        )
        db.commit()
        if admin_password == "admin":
            logger.warning("Admin created with default password. "
                           "Set ADMIN_PASSWORD env var for production.")
        logger.info("Admin user created (username: admin)")

    db.close()
    logger.info("Database initialized at %s", database)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
