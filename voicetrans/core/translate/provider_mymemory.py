"""
MyMemory翻訳APIプロバイダの実装
"""

from .provider_base import ProviderError, TranslationProvider, encode_uri_component


class MyMemoryProvider(TranslationProvider):
    """MyMemory APIプロバイダ（認証不要）"""

    name = "MyMemory"
    url = "https://api.mymemory.translated.net/get"

    def _request_translation(self, text: str, source_language: str, target_language: str) -> str:
        request_url = (
            f"{self.url}?q={encode_uri_component(text)}"
            f"&langpair={source_language}|{target_language}"
        )
        data = self._get_json(request_url)
        if not isinstance(data, dict):
            raise self._no_translation()

        # HTTP 200でもレスポンス本体のステータスでエラーを返すことがある
        response_status = data.get("responseStatus")
        if str(response_status) != "200":
            raise self._error(ProviderError, f"API error: {response_status}", "API_ERROR")

        response_data = data.get("responseData")
        translated_text = response_data.get("translatedText") if isinstance(response_data, dict) else None
        if not translated_text:
            raise self._no_translation()

        return translated_text
