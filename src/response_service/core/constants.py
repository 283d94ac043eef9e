"""
Constants shared by the storage, recording and analytics layers.
"""

# Keys in the key-value medium
RESPONSES_KEY = "questionnaire_responses"
QUESTIONNAIRES_KEY = "questionnaires"

# Identity used when the caller supplies no submitter
ANONYMOUS_SUBMITTER_ID = "anonymous"
ANONYMOUS_SUBMITTER_NAME = "Anonymous User"

# Index recorded for an answer that could not be resolved against options
UNRESOLVED_OPTION_INDEX = 0
