"""Random value generation.

Everything that consumes entropy lives here so the population engine can be
handed a seeded generator in tests. Semantic strings (emails, postcodes,
phone numbers, urls, names) come from Faker, routed by ``Language``.
"""

from __future__ import annotations

import logging
import random
import string
import uuid
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any, Sequence

from faker import Faker

from .errors import InvalidConstraintError
from .models.enums import CharacterSetType, Casing, Language, PropertyType, Spaces

logger = logging.getLogger(__name__)


_LANGUAGE_LOCALES: dict[Language, str] = {
    Language.ENGLISH: "en_US",
    Language.GERMAN: "de_DE",
    Language.FRENCH: "fr_FR",
    Language.SPANISH: "es_ES",
}

# Extra letters mixed into the alphabet for non-English text.
_LANGUAGE_LETTERS: dict[Language, str] = {
    Language.ENGLISH: "",
    Language.GERMAN: "äöüÄÖÜß",
    Language.FRENCH: "éèêëàâçôûùïîÉÈÀÇ",
    Language.SPANISH: "ñáéíóúüÑÁÉÍÓÚ",
}

_PUNCTUATION = "!#$%&()*+,-./:;<=>?@[]^_{|}~"

_PROPERTY_TYPE_PROVIDERS: dict[PropertyType, str] = {
    PropertyType.EMAIL: "email",
    PropertyType.POSTAL_CODE: "postcode",
    PropertyType.TELEPHONE_NUMBER: "phone_number",
    PropertyType.URL: "url",
    PropertyType.FIRST_NAME: "first_name",
    PropertyType.LAST_NAME: "last_name",
    PropertyType.FULL_NAME: "name",
    PropertyType.ADDRESS_LINE: "street_address",
    PropertyType.CITY: "city",
    PropertyType.COUNTRY: "country",
    PropertyType.COMPANY: "company",
}


def _alphabet(character_set: CharacterSetType, language: Language) -> str:
    letters = string.ascii_letters + _LANGUAGE_LETTERS.get(language, "")
    if character_set == CharacterSetType.ALPHA:
        return letters
    if character_set == CharacterSetType.NUMERIC:
        return string.digits
    if character_set == CharacterSetType.ALPHA_NUMERIC:
        return letters + string.digits
    return letters + string.digits + _PUNCTUATION


def _apply_casing(text: str, casing: Casing) -> str:
    """Change case one character at a time so the length never changes."""

    def upper(c: str) -> str:
        u = c.upper()
        return u if len(u) == 1 else c

    def lower(c: str) -> str:
        low = c.lower()
        return low if len(low) == 1 else c

    if casing == Casing.UPPER:
        return "".join(upper(c) for c in text)
    if casing == Casing.LOWER:
        return "".join(lower(c) for c in text)
    if casing == Casing.PROPER:
        out = []
        start_of_word = True
        for c in text:
            out.append(upper(c) if start_of_word else lower(c))
            start_of_word = c == " "
        return "".join(out)
    return text


class RandomValueGenerator:
    """Produces bounded random values of every kind the engine synthesizes.

    Args:
        seed: Optional seed. Unseeded generators are not reproducible.
        rng: Optional pre-built ``random.Random`` (takes precedence over seed).
    """

    def __init__(self, seed: int | None = None, rng: random.Random | None = None):
        self.seed = seed
        self.rng = rng or random.Random(seed)
        self._fakers: dict[str, Faker] = {}

    def _faker(self, language: Language) -> Faker:
        locale = _LANGUAGE_LOCALES.get(language, "en_US")
        fake = self._fakers.get(locale)
        if fake is None:
            fake = Faker(locale)
            fake.seed_instance(self.rng.randint(0, 2**31 - 1))
            self._fakers[locale] = fake
        return fake

    # -- numbers --------------------------------------------------------

    def random_integer(self, minimum: int, maximum: int | None = None) -> int:
        """Random int in ``[minimum, maximum]``; one argument means ``[0, arg]``."""
        if maximum is None:
            minimum, maximum = 0, minimum
        if maximum < minimum:
            raise InvalidConstraintError(
                f"Integer maximum {maximum} is smaller than minimum {minimum}"
            )
        return self.rng.randint(minimum, maximum)

    def random_double(self, minimum: float, maximum: float) -> float:
        if maximum < minimum:
            raise InvalidConstraintError(
                f"Double maximum {maximum} is smaller than minimum {minimum}"
            )
        return self.rng.uniform(minimum, maximum)

    def random_decimal(
        self, minimum: float, maximum: float, places: int = 2
    ) -> Decimal:
        value = self.random_double(minimum, maximum)
        return Decimal(str(round(value, places)))

    def random_bool(self) -> bool:
        return self.rng.random() < 0.5

    # -- misc -----------------------------------------------------------

    def random_datetime(
        self, start: datetime | None = None, end: datetime | None = None
    ) -> datetime:
        """Random datetime (second resolution) between start and end."""
        end = end or datetime(2030, 12, 31)
        start = start or datetime(1970, 1, 1)
        span = int((end - start).total_seconds())
        return start + timedelta(seconds=self.rng.randint(0, max(span, 0)))

    def random_date(self) -> date:
        return self.random_datetime().date()

    def random_uuid(self) -> uuid.UUID:
        return uuid.UUID(int=self.rng.getrandbits(128), version=4)

    def random_choice(self, options: Sequence[Any]) -> Any:
        if not options:
            raise ValueError("Cannot choose from an empty sequence")
        return self.rng.choice(list(options))

    # -- strings --------------------------------------------------------

    def random_string(
        self,
        min_length: int,
        max_length: int | None = None,
        character_set: CharacterSetType = CharacterSetType.ALPHA,
        spaces: Spaces = Spaces.NONE,
        casing: Casing = Casing.ANY,
        language: Language = Language.ENGLISH,
    ) -> str:
        """Random string whose length lies in ``[min_length, max_length]``.

        With a single length argument the string has exactly that length.
        """
        if max_length is None:
            max_length = min_length
        if min_length < 0:
            raise InvalidConstraintError(f"Negative string length {min_length}")
        if max_length < min_length:
            raise InvalidConstraintError(
                f"String maximum length {max_length} is smaller than "
                f"minimum length {min_length}"
            )

        length = self.rng.randint(min_length, max_length)
        alphabet = _alphabet(character_set, language)
        chars = [self.rng.choice(alphabet) for _ in range(length)]

        if length and spaces == Spaces.START:
            chars[0] = " "
        elif length and spaces == Spaces.END:
            chars[-1] = " "
        elif spaces == Spaces.MIDDLE and length > 2:
            for _ in range(max(1, length // 8)):
                chars[self.rng.randint(1, length - 2)] = " "
        elif spaces == Spaces.ANY:
            for i in range(length):
                if self.rng.random() < 0.125:
                    chars[i] = " "

        return _apply_casing("".join(chars), casing)

    def random_property_type(
        self, property_type: PropertyType, language: Language = Language.ENGLISH
    ) -> str:
        """Semantic string (email, postcode, phone number, url, names...)."""
        provider = _PROPERTY_TYPE_PROVIDERS.get(property_type)
        if provider is None:
            raise ValueError(f"Unknown property type: {property_type!r}")
        return str(getattr(self._faker(language), provider)())
