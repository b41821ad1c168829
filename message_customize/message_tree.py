"""Conversion between nested message trees and flat dotted-key mappings.

A message tree is a ``dict`` whose values are either leaves (a string or a
list of strings) or further trees.  The flat form maps a dotted key path such
as ``"date.formats.default"`` to the leaf found at that path.
"""
import yaml


class RawPending:
    """Unparsed bulk text kept in place of a tree after a YAML parse failure.

    It is deliberately neither a leaf nor a node, so nothing downstream can
    mistake it for valid override data.
    """

    def __init__(self, text, error):
        self.text = text
        self.error = error

    def __eq__(self, other):
        return (isinstance(other, RawPending)
                and self.text == other.text and self.error == other.error)

    def __repr__(self):
        return f"RawPending({self.text!r}, {self.error!r})"


def is_node(value):
    return isinstance(value, dict)


def is_leaf(value):
    return isinstance(value, (str, list))


def is_blank(value):
    """Mirror of "nothing there": None, empty containers and blank strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (dict, list)):
        return not value
    return False


def deep_merge(base, other):
    """Return a new dict with ``other`` merged into ``base``.

    Nested dicts are merged key by key; any other value in ``other`` replaces
    the one in ``base``.
    """
    merged = dict(base)
    for key, value in other.items():
        if is_node(merged.get(key)) and is_node(value):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


# { date: { formats: { default: '%m/%d/%Y' } } } -> { 'date.formats.default': '%m/%d/%Y' }
def flatten_hash(tree):
    flat = {}
    for key, value in tree.items():
        if is_node(value):
            for sub_key, sub_value in flatten_hash(value).items():
                flat[f"{key}.{sub_key}"] = sub_value
        else:
            flat[key] = value
    return flat


def parse_list_literal(value):
    """Turn ``"[a, b]"`` into ``["a", "b"]``.

    Tries YAML first; strings YAML cannot read (e.g. ``"[%Y, %m, %d]"``) are
    split on commas. Nested brackets and quoted commas are not supported.
    """
    try:
        return yaml.safe_load(value)
    except yaml.YAMLError:
        return [item.strip() for item in value[1:-1].split(",")]


def _format_value(value):
    if isinstance(value, str) and value.startswith("[") and value.endswith("]"):
        return parse_list_literal(value)
    return value


# { 'date.formats.default': '%m/%d/%Y' } -> { date: { formats: { default: '%m/%d/%Y' } } }
def nested_hash(flat):
    tree = {}
    for flat_key, value in flat.items():
        branch = _format_value(value)
        for key in reversed(str(flat_key).split(".")):
            branch = {key: branch}
        tree = deep_merge(tree, branch)
    return tree
