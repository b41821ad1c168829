import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


def _locale_paths():
    paths = os.environ.get("MESSAGE_CUSTOMIZE_LOCALE_PATHS")
    if paths:
        return [path for path in paths.split(os.pathsep) if path]
    return [os.path.join(BASE_DIR, "locales")]


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-production")
    DATABASE = os.environ.get("MESSAGE_CUSTOMIZE_DATABASE",
                              os.path.join(BASE_DIR, "message_customize.db"))

    # Directories searched for <language>.yml translation files
    LOCALE_PATHS = _locale_paths()

    # Override keys are checked against this language's catalog
    BASE_LANGUAGE = "en"
    DEFAULT_LANGUAGE = "en"

    SETTING_NAME = "plugin_message_customize"
