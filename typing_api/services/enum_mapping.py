"""Store token <-> API enum mapping and row-to-schema parsers.

Every enum is a closed set whose member names equal the store tokens, so one
pair of functions covers all of them. Unknown tokens raise instead of falling
back to an arbitrary variant.
"""

from enum import Enum
from typing import TypeVar

from typing_api.models.preset import TestPreset
from typing_api.models.user import User
from typing_api.models.user_settings import UserSettings
from typing_api.schemas.enums import AuthProvider, CaretStyle, TestLanguage, TestType, UserBadge
from typing_api.schemas.preset import TestPresetOut
from typing_api.schemas.user import UserOut, UserSettingsOut

E = TypeVar("E", bound=Enum)


def to_api(enum_cls: type[E], token: str) -> E:
    """Map a stored token (e.g. "TIME") to its API enum member."""
    try:
        return enum_cls[token]
    except KeyError:
        raise ValueError(f"Unknown {enum_cls.__name__} token: {token!r}") from None


def to_store(member: Enum) -> str:
    """Map an API enum member back to the token stored in the database."""
    return member.name


def parse_test_preset(row: TestPreset) -> TestPresetOut:
    return TestPresetOut(
        id=row.id,
        user_id=row.user_id,
        type=to_api(TestType, row.type),
        language=to_api(TestLanguage, row.language),
        words=row.words,
        time=row.time,
        punctuated=bool(row.punctuated),
        content=row.content,
        creator_image=row.creator_image,
        created_at=row.created_at,
    )


def parse_user(row: User) -> UserOut:
    return UserOut(
        id=row.id,
        username=row.username,
        image=row.image,
        badge=to_api(UserBadge, row.badge),
        auth_provider=to_api(AuthProvider, row.auth_provider),
        created_at=row.created_at,
    )


def parse_user_settings(row: UserSettings | None) -> UserSettingsOut:
    """Settings for a user; users without a settings row get the default caret."""
    if row is None:
        return UserSettingsOut(caret_style=CaretStyle.LINE)
    return UserSettingsOut(caret_style=to_api(CaretStyle, row.caret_style))
