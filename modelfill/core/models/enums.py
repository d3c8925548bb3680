"""Enumerations shared by the generators, conventions and overrides."""

from enum import Enum


class CharacterSetType(str, Enum):
    ALPHA = "alpha"
    NUMERIC = "numeric"
    ALPHA_NUMERIC = "alpha_numeric"
    ANYTHING = "anything"


class Spaces(str, Enum):
    NONE = "none"
    ANY = "any"
    MIDDLE = "middle"
    START = "start"
    END = "end"


class Casing(str, Enum):
    ANY = "any"
    LOWER = "lower"
    UPPER = "upper"
    PROPER = "proper"


class Language(str, Enum):
    """Alphabet and Faker locale used for generated text."""

    ENGLISH = "english"
    GERMAN = "german"
    FRENCH = "french"
    SPANISH = "spanish"


class PropertyType(str, Enum):
    """Semantic kinds of string values."""

    EMAIL = "email"
    POSTAL_CODE = "postal_code"
    TELEPHONE_NUMBER = "telephone_number"
    URL = "url"
    FIRST_NAME = "first_name"
    LAST_NAME = "last_name"
    FULL_NAME = "full_name"
    ADDRESS_LINE = "address_line"
    CITY = "city"
    COUNTRY = "country"
    COMPANY = "company"


class DataType(str, Enum):
    """Data types a string property can declare via the ``DataTypeOf`` marker.

    Only the first four map onto a semantic generator; the rest are accepted
    so models can describe themselves, and fall through to length handling.
    """

    EMAIL_ADDRESS = "email_address"
    POSTAL_CODE = "postal_code"
    PHONE_NUMBER = "phone_number"
    URL = "url"
    TEXT = "text"
    MULTILINE_TEXT = "multiline_text"
    PASSWORD = "password"


class ConventionFilterType(str, Enum):
    """How a convention's filter is compared with a property name."""

    EXACT = "exact"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    CONTAINS = "contains"
