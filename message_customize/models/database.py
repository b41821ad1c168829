import sqlite3

import click
from flask import current_app, g
from flask.cli import with_appcontext

from message_customize.init_db import init_db


def get_db():
    """Connection of the current app context, opened on first use."""
    if "db" not in g:
        g.db = sqlite3.connect(current_app.config["DATABASE"])
        g.db.row_factory = sqlite3.Row
    return g.db


def close_db(e=None):
    db = g.pop("db", None)
    if db is not None:
        db.close()


def query_db(query, args=(), one=False):
    cur = get_db().execute(query, args)
    rows = cur.fetchall()
    cur.close()
    if one:
        return rows[0] if rows else None
    return rows


@click.command("init-db")
@with_appcontext
def init_db_command():
    """Create the tables and seed the admin user."""
    init_db(current_app.config["DATABASE"])
    click.echo(f"Database initialized at {current_app.config['DATABASE']}")


def init_app(app):
    app.teardown_appcontext(close_db)
    app.cli.add_command(init_db_command)
