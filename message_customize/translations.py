from message_customize.catalog import get_catalog, reload_translations
from message_customize.message_tree import flatten_hash


def get_translator(lang="en", catalog=None, fallback_lang="en"):
    """Return a translation function for the given language."""
    catalog = catalog or get_catalog()
    missing = [language for language in (lang, fallback_lang)
               if catalog.translations_for(language) is None]
    if missing:
        reload_translations(catalog, missing)

    strings = flatten_hash(catalog.translations_for(lang) or {})
    fallback = flatten_hash(catalog.translations_for(fallback_lang) or {})

    def t(key, **kwargs):
        text = strings.get(key, fallback.get(key, key))
        if kwargs:
            text = text.format(**kwargs)
        return text

    return t
