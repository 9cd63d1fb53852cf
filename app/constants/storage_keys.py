# Keys in the flat key-value store
HISTORY_KEY = 'scan_history_v1'
LANGUAGE_KEY = 'language_v1'
THEME_MODE_KEY = 'theme_mode_v1'
API_KEY_KEY = 'gemini_api_key_v1'
