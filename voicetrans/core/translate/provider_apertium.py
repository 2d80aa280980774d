"""
Apertium APY翻訳プロバイダの実装
"""

from .provider_base import TranslationProvider, encode_uri_component


class ApertiumProvider(TranslationProvider):
    """Apertium APYプロバイダ"""

    name = "Apertium"
    url = "https://apertium.org/apy/translate"

    def _request_translation(self, text: str, source_language: str, target_language: str) -> str:
        request_url = (
            f"{self.url}?q={encode_uri_component(text)}"
            f"&langpair={source_language}|{target_language}"
        )
        data = self._get_json(request_url)

        response_data = data.get("responseData") if isinstance(data, dict) else None
        translated_text = response_data.get("translatedText") if isinstance(response_data, dict) else None
        if not translated_text:
            raise self._no_translation()

        return translated_text
