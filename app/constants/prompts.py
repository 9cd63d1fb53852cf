"""
Fixed prompt templates sent to the hosted model.

Labels stay in English in every template; the translation prompt lists the
union of both label groups so translated summaries keep parsing.
"""
from app.constants.languages import WORKING_LANGUAGE

IDENTIFY_LABELS = ('Name', 'Light', 'Water', 'Soil', 'Temperature', 'Humidity', 'Fertilizer', 'Tips')
DIAGNOSE_LABELS = ('Disease', 'Cause', 'Symptoms', 'Severity', 'Treatment', 'Prevention', 'Tips')

# Care fields shown as chips and included in share text, in display order
CARE_LABELS = ('Light', 'Water', 'Soil', 'Temperature', 'Humidity', 'Fertilizer')

ALL_LABELS = tuple(dict.fromkeys(IDENTIFY_LABELS + DIAGNOSE_LABELS))

EMPTY_RESPONSE_PLACEHOLDER = 'No description available.'

_LANGUAGE_RULES = (
    f"Respond fully in {WORKING_LANGUAGE} (use only {WORKING_LANGUAGE} in your wording).\n"
    f"IMPORTANT: Keep the labels EXACTLY in {WORKING_LANGUAGE} as specified below, "
    f"and write all field VALUES (and Tips) in {WORKING_LANGUAGE}.\n\n"
)

IDENTIFY_PROMPT = (
    "You are a plant identification assistant. Given an image of a plant, identify the most likely "
    "common name and scientific name. Then provide concise growing guidance.\n\n"
    + _LANGUAGE_RULES
    + "Respond in this exact labeled format (one field per line):\n"
    "Name: <common name in English> (<scientific name, Latin>)\n"
    "Light: <brief guidance in English>\n"
    "Water: <brief guidance in English>\n"
    "Soil: <brief guidance in English>\n"
    "Temperature: <brief guidance in English>\n"
    "Humidity: <optional, brief in English>\n"
    "Fertilizer: <optional, brief in English>\n"
    "Tips: <bullet-like short tips separated by semicolons in English>"
)

DIAGNOSE_PROMPT = (
    "You are a plant disease diagnosis assistant. Given an image of a plant, identify any likely "
    "diseases or issues (fungal, bacterial, pest, nutrient deficiency, environmental stress) and "
    "provide actionable treatment and prevention steps.\n\n"
    + _LANGUAGE_RULES
    + "Respond in this exact labeled format (one field per line):\n"
    "Disease: <likely disease or issue in English>\n"
    "Cause: <brief cause in English>\n"
    "Symptoms: <key visible symptoms in English>\n"
    "Severity: <low/medium/high in English>\n"
    "Treatment: <concise, safe treatment steps in English>\n"
    "Prevention: <concise prevention steps in English>\n"
    "Tips: <short bullet-like tips separated by semicolons in English>"
)

def translation_prompt(language_name: str) -> str:
    return (
        f'Translate the following plant description into "{language_name}".\n'
        "IMPORTANT:\n"
        f"- Keep the labels EXACTLY in {WORKING_LANGUAGE}: {', '.join(ALL_LABELS)}.\n"
        "- Translate only the VALUES after the colon for each label.\n"
        "- Keep the overall format identical; one field per line; Tips separated by semicolons.\n"
        "Do not add commentary. Output only the translated text."
    )
