"""
Display languages offered for on-demand translation of scan summaries.

Generation always happens in WORKING_LANGUAGE; these names are passed verbatim
to the translation prompt.
"""

SUPPORTED_LANGUAGES = [
    'English',
    'Spanish',
    'French',
    'German',
    'Italian',
    'Portuguese',
    'Hindi',
    'Kannada',
    'Tamil',
    'Telugu',
    'Bengali',
    'Chinese',
    'Japanese',
    'Korean',
    'Arabic',
    'Russian',
]

# The language the model is always asked to answer in
WORKING_LANGUAGE = 'English'

# Default display language
DEFAULT_LANGUAGE = 'English'

def is_supported_language(language_name: str) -> bool:
    """Check if a language name is supported (case-insensitive)"""
    return normalize_language(language_name) is not None

def normalize_language(language_name: str):
    """Return the canonical spelling of a supported language, or None"""
    if not isinstance(language_name, str):
        return None
    wanted = language_name.strip().lower()
    for name in SUPPORTED_LANGUAGES:
        if name.lower() == wanted:
            return name
    return None
