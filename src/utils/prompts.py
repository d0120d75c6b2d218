"""Prompt templates for completion calls.

Templates use Phi-3 chat delimiters. The same delimiters are passed as stop
sequences so the model halts at the end of its own turn.
"""

STOP_SEQUENCES = ["<|end|>", "<|user|>"]


def build_dictionary_entry_prompt(word: str) -> str:
    """Prompt asking for a full English-Vietnamese entry as JSON."""
    return f"""<|system|>
You are an English-Vietnamese dictionary. Provide comprehensive dictionary information in JSON format.
<|end|>
<|user|>
Provide a complete dictionary entry for the English word "{word}" with Vietnamese translations.

Return ONLY valid JSON in this exact format:
{{
  "word": "{word}",
  "pronunciations": [
    {{"accent": "US", "ipa": "/pronunciation/"}},
    {{"accent": "UK", "ipa": "/pronunciation/"}}
  ],
  "definitions": [
    {{
      "pos": "part of speech",
      "definition_en": "English definition",
      "definition_vi": "Vietnamese translation",
      "level": "beginner/intermediate/advanced",
      "examples": [
        {{"en": "English example", "vi": "Vietnamese example"}}
      ]
    }}
  ],
  "word_forms": {{"plural": "...", "past": "...", "present": "..."}},
  "synonyms": ["synonym1", "synonym2"]
}}
<|end|>
<|assistant|>
"""


def build_translation_prompt(text: str, source_lang_name: str, target_lang_name: str) -> str:
    """Prompt asking for a bare translation, no commentary."""
    return f"""<|system|>
You are a professional translator. Translate accurately and naturally.
<|end|>
<|user|>
Translate the following text from {source_lang_name} to {target_lang_name}.
Output ONLY the translation, nothing else.

Text: {text}
<|end|>
<|assistant|>
"""
