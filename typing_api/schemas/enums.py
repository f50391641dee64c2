"""API-facing enums. Member names match the store tokens; values are what clients see."""

from enum import Enum


class TestType(str, Enum):
    __test__ = False

    TIME = "time"
    WORDS = "words"


class TestLanguage(str, Enum):
    __test__ = False

    ENGLISH = "english"
    SPANISH = "spanish"


class CaretStyle(str, Enum):
    LINE = "line"
    BLOCK = "block"
    HOLLOW = "hollow"


class UserBadge(str, Enum):
    DEFAULT = "default"
    PRO = "pro"
    TESTER = "tester"


class AuthProvider(str, Enum):
    DEFAULT = "default"
    DISCORD = "discord"
    GITHUB = "github"
    GOOGLE = "google"
