"""MongoDB adapter package — collection names shared by repositories."""

WORDS_COLLECTION_NAME = 'words'
PRONUNCIATIONS_COLLECTION_NAME = 'pronunciations'
DEFINITIONS_COLLECTION_NAME = 'definitions'
EXAMPLES_COLLECTION_NAME = 'examples'
WORD_FORMS_COLLECTION_NAME = 'word_forms'
SYNONYMS_COLLECTION_NAME = 'synonyms'
