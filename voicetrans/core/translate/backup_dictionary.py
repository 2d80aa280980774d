"""
辞書ベースの予備翻訳
すべての翻訳プロバイダーが使えない場合の最終手段
"""

import re
from typing import Dict, List, Optional, Pattern, Tuple

from .models import TranslationResult

BACKUP_PROVIDER_ID = "BackupDictionary"
BACKUP_PREFIX = "[Резервний переклад] "

# 英語 -> ウクライナ語（置換はこの順序で行う）
DEFAULT_TABLE: Dict[str, str] = {
    "hello": "привіт", "world": "світ", "how": "як", "are": "є", "you": "ти",
    "what": "що", "where": "де", "when": "коли", "why": "чому", "who": "хто",
    "which": "який", "good": "добре", "morning": "ранок", "afternoon": "день",
    "evening": "вечір", "night": "ніч", "thank": "дякую", "please": "будь ласка",
    "yes": "так", "no": "ні", "sorry": "вибачте", "help": "допомога",
    "name": "ім'я", "my": "мій", "is": "є", "your": "твій", "his": "його",
    "her": "її", "our": "наш", "their": "їхній", "and": "і", "but": "але",
    "or": "або", "because": "тому що", "if": "якщо", "then": "тоді",
    "very": "дуже", "too": "теж", "also": "також", "only": "тільки",
}


class BackupDictionary:
    """単語単位の置換による予備翻訳（状態を持たない）"""

    def __init__(self, table: Optional[Dict[str, str]] = None, prefix: str = BACKUP_PREFIX):
        self.prefix = prefix
        # 単語境界で大文字小文字を区別せずに一致させる
        self._patterns: List[Tuple[Pattern, str]] = [
            (re.compile(rf"\b{re.escape(word.lower())}\b", re.IGNORECASE), replacement)
            for word, replacement in (table if table is not None else DEFAULT_TABLE).items()
        ]

    def translate(self, text: str) -> TranslationResult:
        """辞書置換を行い、プレフィックス付きの結果を返す"""
        translated = text
        for pattern, replacement in self._patterns:
            translated = pattern.sub(lambda _match, value=replacement: value, translated)

        return TranslationResult(
            succeeded=True,
            text=self.prefix + translated,
            provider_id=BACKUP_PROVIDER_ID,
        )
