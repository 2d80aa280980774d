"""
Google翻訳（非公式エンドポイント）プロバイダの実装
"""

from .provider_base import TranslationProvider, encode_uri_component


class GoogleTranslateProvider(TranslationProvider):
    """Google翻訳 gtxクライアントエンドポイント（APIキー不要）"""

    name = "GoogleTranslate"
    url = "https://translate.googleapis.com/translate_a/single"

    def _request_translation(self, text: str, source_language: str, target_language: str) -> str:
        request_url = (
            f"{self.url}?client=gtx&sl={source_language}&tl={target_language}"
            f"&dt=t&q={encode_uri_component(text)}"
        )
        data = self._get_json(request_url)

        # レスポンスは入れ子の配列: [[["翻訳文", "原文", ...], ...], ...]
        try:
            translated_text = data[0][0][0]
        except (IndexError, KeyError, TypeError):
            translated_text = None

        if not translated_text or not isinstance(translated_text, str):
            raise self._no_translation()

        return translated_text
