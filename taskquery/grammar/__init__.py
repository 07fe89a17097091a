# taskquery/grammar/__init__.py
from .locales import DateVocabulary, UnsupportedLocaleError, get_vocabulary, supported_locales
from .builder import build_grammar, build_date_grammar, load_parser

__all__ = [
    "DateVocabulary",
    "UnsupportedLocaleError",
    "get_vocabulary",
    "supported_locales",
    "build_grammar",
    "build_date_grammar",
    "load_parser",
]
