"""Key naming scheme shared with the audience clients.

The names are part of the interoperability contract and must not change.
"""

from __future__ import annotations

CURRENT_SESSION_KEY = "currentGameSession"
CLASSES_KEY = "mathMillionaireClasses"
QUESTIONS_KEY = "mathMillionaireQuestions"


def _session_prefix(session_id: str) -> str:
    return f"gameSession_{session_id}"


def active_key(session_id: str) -> str:
    return f"{_session_prefix(session_id)}_active"


def question_pointer_key(session_id: str) -> str:
    return f"{_session_prefix(session_id)}_question"


def class_scores_key(session_id: str) -> str:
    return f"{_session_prefix(session_id)}_classScores"


def current_question_data_key(session_id: str) -> str:
    return f"{_session_prefix(session_id)}_questionData"


def question_data_key(session_id: str, question_index: int) -> str:
    return f"{_session_prefix(session_id)}_questionData_{question_index}"


def question_class_key(session_id: str, question_index: int) -> str:
    return f"{_session_prefix(session_id)}_questionClass_{question_index}"


def votes_key(session_id: str, question_index: int) -> str:
    return f"{_session_prefix(session_id)}_votes_{question_index}"


def class_votes_key(session_id: str, question_index: int) -> str:
    return f"{_session_prefix(session_id)}_classVotes_{question_index}"


def class_lifelines_key(session_id: str, class_name: str) -> str:
    return f"{_session_prefix(session_id)}_classLifelines_{class_name}"
