"""Translation catalog handle.

The catalog reads ``<language>.yml`` files found on its search path. Each file
holds one or more top-level language keys, Rails style::

    en:
      date:
        formats:
          default: "%m/%d/%Y"

Base tables (exactly what the files say) are kept apart from the effective
tables, which also carry the overrides supplied by ``overlay`` when a
language is loaded.
"""
import glob
import logging
import os

import yaml
from flask import current_app

from message_customize.message_tree import deep_merge, is_node

logger = logging.getLogger(__name__)

EXTENSION_KEY = "message_catalog"
RESOURCE_PATTERNS = ("*.yml", "*.yaml")


class MessageCatalog:
    def __init__(self, locale_paths, overlay=None):
        self.locale_paths = list(locale_paths)
        # Callable taking a language and returning the overrides for it
        self.overlay = overlay
        self._base = {}
        self._translations = {}

    @property
    def load_path(self):
        paths = []
        for location in self.locale_paths:
            if os.path.isfile(location):
                paths.append(location)
                continue
            for pattern in RESOURCE_PATTERNS:
                paths.extend(glob.glob(os.path.join(location, pattern)))
        return sorted(set(paths))

    def available_languages(self):
        languages = []
        for path in self.load_path:
            language = resource_language(path)
            if language not in languages:
                languages.append(language)
        return languages

    def find_language(self, language=None):
        """Resolve ``language`` against the recognized languages.

        A list returns its recognized members in order; a single value returns
        itself as a string when recognized, otherwise None.
        """
        available = self.available_languages()
        if isinstance(language, (list, tuple, set)):
            return [str(lang) for lang in language if str(lang) in available]
        if language and str(language) in available:
            return str(language)
        return None

    def translations_for(self, language):
        return self._translations.get(language)

    def base_translations_for(self, language):
        return self._base.get(language)

    def loaded_languages(self):
        return sorted(self._translations)

    def load_translations(self, paths):
        """Load ``paths`` and replace the tables of the languages they hold.

        Languages not present in ``paths`` keep their current tables.
        """
        loaded = {}
        for path in paths:
            if not os.path.isfile(path):
                logger.warning("Translation file %s not found, skipping", path)
                continue
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            if not is_node(data):
                logger.warning("Translation file %s does not hold a mapping, skipping", path)
                continue
            for language, messages in data.items():
                if is_node(messages):
                    loaded[str(language)] = deep_merge(loaded.get(str(language), {}), messages)

        for language, messages in loaded.items():
            self._base[language] = messages
            self._translations[language] = self._apply_overlay(language, messages)
        return sorted(loaded)

    def _apply_overlay(self, language, messages):
        if self.overlay is None:
            return messages
        overrides = self.overlay(language)
        if not is_node(overrides) or not overrides:
            return messages
        return deep_merge(messages, overrides)


def resource_language(path):
    return os.path.splitext(os.path.basename(path))[0]


def reload_translations(catalog, languages):
    """Reload only the resource files of ``languages``.

    Unrecognized languages are ignored and other languages' tables stay as
    they are. Returns the paths that were handed to the catalog.
    """
    languages = catalog.find_language(list(languages))
    paths = [path for path in catalog.load_path if resource_language(path) in languages]
    logger.info("Reloading translations for %s", ", ".join(languages) or "no languages")
    catalog.load_translations(paths)
    return paths


def get_catalog():
    return current_app.extensions[EXTENSION_KEY]


def init_app(app, overlay=None):
    catalog = MessageCatalog(app.config["LOCALE_PATHS"], overlay=overlay)
    app.extensions[EXTENSION_KEY] = catalog
    return catalog
