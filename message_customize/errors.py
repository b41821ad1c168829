from collections import namedtuple

INVALID_FORMAT = "InvalidFormat"
UNAVAILABLE_LANGUAGE = "UnavailableLanguage"
UNAVAILABLE_KEY = "UnavailableKey"
PARSE_FAILURE = "ParseFailure"

# One entry of a validation pass. ``field`` is "base" for errors about the
# whole setting, as the edit page shows them above the form.
ValidationError = namedtuple("ValidationError", ["field", "message", "kind"])
