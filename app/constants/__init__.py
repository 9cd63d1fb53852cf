# Constants package
from app.constants.languages import (
    SUPPORTED_LANGUAGES,
    WORKING_LANGUAGE,
    DEFAULT_LANGUAGE,
    is_supported_language,
    normalize_language
)
from app.constants.prompts import (
    IDENTIFY_LABELS,
    DIAGNOSE_LABELS,
    CARE_LABELS,
    ALL_LABELS,
    EMPTY_RESPONSE_PLACEHOLDER
)

__all__ = [
    'SUPPORTED_LANGUAGES',
    'WORKING_LANGUAGE',
    'DEFAULT_LANGUAGE',
    'is_supported_language',
    'normalize_language',
    'IDENTIFY_LABELS',
    'DIAGNOSE_LABELS',
    'CARE_LABELS',
    'ALL_LABELS',
    'EMPTY_RESPONSE_PLACEHOLDER'
]
