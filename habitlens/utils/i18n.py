"""
Multi-language internationalization module

Supports 5 languages: Chinese, English, French, Japanese, Spanish
One translation file per module under utils/locales/<module>.json
Default language: English
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict


class I18n:
    """Multi-language internationalization class"""

    # Language code mapping
    LANGUAGE_CODES = {
        "zh": "zh",
        "zh-cn": "zh",
        "zh_cn": "zh",
        "zh-hans": "zh",
        "zh_hans": "zh",
        "en": "en",
        "en-us": "en",
        "en_us": "en",
        "fr": "fr",
        "ja": "ja",
        "es": "es",
        "chinese": "zh",
        "english": "en",
        "french": "fr",
        "japanese": "ja",
        "spanish": "es",
    }

    def __init__(self, locales_dir: Path | None = None):
        self._translations_cache = {}
        self._locales_dir = locales_dir or Path(__file__).parent / "locales"

    def normalize_language(self, language: str | None) -> str:
        if not language:
            return "en"
        return self.LANGUAGE_CODES.get(language.strip().lower(), "en")

    def _load_translations(self, module_name: str) -> Dict[str, Any]:
        if module_name in self._translations_cache:
            return self._translations_cache[module_name]

        translation_file = self._locales_dir / f"{module_name}.json"

        if not translation_file.exists():
            logging.warning(f"Translation file not found: {translation_file}")
            self._translations_cache[module_name] = {}
            return {}

        try:
            with open(translation_file, "r", encoding="utf-8") as f:
                translations = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logging.error(f"Failed to load translations for {module_name}: {e}")
            translations = {}

        self._translations_cache[module_name] = translations
        return translations

    def get_text(self, key: str, language: str = "en", module: str = "default", **kwargs) -> str:
        """
        Get multi-language text

        Args:
            key: Text key
            language: Language code, default English
            module: Module name (translation file name)
            **kwargs: Format parameters

        Returns:
            str: Text in corresponding language, falling back to English, then Chinese, then the key itself
        """
        lang_code = self.normalize_language(language)

        text_dict = self._load_translations(module).get(key, {})
        text = text_dict.get(lang_code) or text_dict.get("en") or text_dict.get("zh") or key

        if kwargs:
            try:
                text = text.format(**kwargs)
            except (KeyError, IndexError, ValueError):
                logging.warning(f"Failed to format text '{key}' for language '{lang_code}'")

        return text

    def t(self, key: str, language: str = "en", module: str = "default", **kwargs) -> str:
        """
        Shorthand for get_text
        """
        return self.get_text(key, language, module, **kwargs)


# Create global instance
i18n = I18n()


def t(key: str, language: str = "en", module: str = "default", **kwargs) -> str:
    """Global translation function"""
    return i18n.get_text(key, language, module, **kwargs)
