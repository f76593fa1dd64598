from deep_translator import GoogleTranslator
from typing import Dict, Optional
import logging

logger = logging.getLogger(__name__)

class TranslationService:

    @staticmethod
    def translate_from_english(text: str, target_lang: str) -> Optional[str]:
        """Translate an English reply; None when the translation fails."""
        try:
            translator = GoogleTranslator(source='en', target=target_lang)
            translation = translator.translate(text)
            logger.info(f"Translated reply to '{target_lang}'")
            return translation
        except Exception as e:
            logger.error(f"TranslationService: translation to '{target_lang}' failed: {e}")
            return None

    @staticmethod
    def build_translations(text: str, language: Optional[str]) -> Optional[Dict[str, str]]:
        if not language:
            return None

        language = language.strip()
        if not language or language.lower() == 'en':
            return None

        translated = TranslationService.translate_from_english(text, language)
        if translated is None:
            return None
        return {language: translated}
