"""Localized user-facing messages."""

import logging

logger = logging.getLogger(__name__)

FALLBACK_LANGUAGE = "en"

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "subcatimagesgallery": "Images from subcategories",
        "subcatimagesgallery-empty": "No images found in subcategories.",
        "badtitletext": (
            "The requested page title was invalid, empty, or an incorrectly linked "
            "inter-language or inter-wiki title. It may contain one or more characters "
            "that cannot be used in titles."
        ),
    },
    "ru": {
        "subcatimagesgallery": "Изображения из подкатегорий",
        "subcatimagesgallery-empty": "В подкатегориях не найдено изображений.",
        "badtitletext": (
            "Запрашиваемое название страницы неправильно, пусто, либо неправильно "
            "указано межъязыковое или интервики название. Возможно, в названии "
            "используются недопустимые символы."
        ),
    },
}


def get_message(key: str, language: str = FALLBACK_LANGUAGE) -> str:
    """Look up a message, falling back to English.

    Args:
        key: Message key
        language: Language code

    Returns:
        Message text, or ``⧼key⧽`` if no language defines the key
    """
    text = MESSAGES.get(language, {}).get(key)
    if text is None:
        text = MESSAGES[FALLBACK_LANGUAGE].get(key)
    if text is None:
        logger.warning(f"Missing message: {key}")
        return f"⧼{key}⧽"
    return text
