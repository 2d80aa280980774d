"""
入力テキストが質問かどうかの簡易判定
"""

import re

QUESTION_WORDS = (
    "what", "when", "where", "why", "how", "who", "which",
    "can", "could", "would", "should",
    "is", "are", "do", "does", "did",
)

_QUESTION_WORD_PATTERN = re.compile(
    r"\b(?:" + "|".join(QUESTION_WORDS) + r")\b", re.IGNORECASE
)


def is_question(text: str) -> bool:
    """疑問符または疑問詞（単独の単語）を含むか"""
    if not text or not text.strip():
        return False
    if "?" in text:
        return True
    return _QUESTION_WORD_PATTERN.search(text) is not None
