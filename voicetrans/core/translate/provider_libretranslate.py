"""
LibreTranslate APIプロバイダの実装
"""

from .provider_base import TranslationProvider


class LibreTranslateProvider(TranslationProvider):
    """LibreTranslate APIプロバイダ"""

    name = "LibreTranslate"
    url = "https://libretranslate.com/translate"

    # LibreTranslateの言語コードが異なる場合の変換
    LANGUAGE_MAP = {
        "en": "en",
        "uk": "uk",
    }

    def _request_translation(self, text: str, source_language: str, target_language: str) -> str:
        payload = {
            "q": text,
            "source": self.LANGUAGE_MAP.get(source_language, source_language),
            "target": self.LANGUAGE_MAP.get(target_language, target_language),
            "format": "text",
        }
        data = self._post_json(self.url, payload)

        translated_text = data.get("translatedText") if isinstance(data, dict) else None
        if not translated_text:
            raise self._no_translation()

        return translated_text
