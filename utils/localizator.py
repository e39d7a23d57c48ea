import json
from functools import lru_cache
from pathlib import Path
from typing import Optional

import config
from enums.message_entity import MessageEntity

L10N_DIR = Path(__file__).resolve().parent.parent / "l10n"


@lru_cache(maxsize=None)
def _load_catalogue(language: str) -> dict:
    with open(L10N_DIR / f"{language}.json", "r", encoding="UTF-8") as f:
        return json.loads(f.read())


class Localizator:

    @staticmethod
    def get_text(entity: MessageEntity, key: str, lang: Optional[str] = None) -> str:
        """
        Get localized text for given entity and key.

        Args:
            entity: Message section (CART, CHECKOUT, COMMON)
            key: Localization key
            lang: Optional language code (e.g., "en").
                  If None, uses config.LANGUAGE (default).

        Returns:
            Localized text string

        Example:
            text = Localizator.get_text(MessageEntity.CHECKOUT, "order_placed")
        """
        language = lang if lang is not None else config.LANGUAGE
        return _load_catalogue(language)[entity.value][key]

    @staticmethod
    def get_currency_symbol(lang: Optional[str] = None) -> str:
        return Localizator.get_text(MessageEntity.COMMON, f"{config.CURRENCY.value.lower()}_symbol", lang=lang)
