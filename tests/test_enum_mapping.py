"""Tests for store token <-> API enum mapping and row parsers."""

from datetime import datetime, timezone

import pytest

from typing_api.models.preset import TestPreset
from typing_api.models.tokens import (
    AUTH_PROVIDER_TOKENS,
    CARET_STYLE_TOKENS,
    TEST_LANGUAGE_TOKENS,
    TEST_TYPE_TOKENS,
    USER_BADGE_TOKENS,
)
from typing_api.models.user import User
from typing_api.models.user_settings import UserSettings
from typing_api.schemas.enums import AuthProvider, CaretStyle, TestLanguage, TestType, UserBadge
from typing_api.services.enum_mapping import (
    parse_test_preset,
    parse_user,
    parse_user_settings,
    to_api,
    to_store,
)

ENUM_TOKENS = [
    (TestType, TEST_TYPE_TOKENS),
    (TestLanguage, TEST_LANGUAGE_TOKENS),
    (CaretStyle, CARET_STYLE_TOKENS),
    (UserBadge, USER_BADGE_TOKENS),
    (AuthProvider, AUTH_PROVIDER_TOKENS),
]


@pytest.mark.parametrize("enum_cls,tokens", ENUM_TOKENS)
def test_every_store_token_maps_and_relabels_idempotently(enum_cls, tokens):
    for token in tokens:
        member = to_api(enum_cls, token)
        assert to_api(enum_cls, to_store(member)) == member
        assert to_store(member) == token


@pytest.mark.parametrize("enum_cls,tokens", ENUM_TOKENS)
def test_api_enum_and_store_tokens_cover_the_same_set(enum_cls, tokens):
    assert {m.name for m in enum_cls} == set(tokens)


def test_known_labels():
    assert to_api(TestType, "TIME") is TestType.TIME
    assert to_api(TestLanguage, "SPANISH") is TestLanguage.SPANISH
    assert to_api(CaretStyle, "HOLLOW") is CaretStyle.HOLLOW
    assert to_api(UserBadge, "TESTER") is UserBadge.TESTER
    assert to_api(AuthProvider, "GITHUB") is AuthProvider.GITHUB
    assert to_store(CaretStyle.BLOCK) == "BLOCK"


def test_unknown_token_raises():
    with pytest.raises(ValueError, match="TestType"):
        to_api(TestType, "MINUTES")
    with pytest.raises(ValueError):
        to_api(UserBadge, "default")


def test_parse_test_preset():
    created = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
    row = TestPreset(
        id=7,
        user_id=None,
        type="WORDS",
        language="SPANISH",
        words=50,
        time=None,
        punctuated=True,
        content="QUOTES",
        creator_image="https://i.imgur.com/xuIzYtW.png",
        created_at=created,
    )
    out = parse_test_preset(row)
    assert out.id == 7
    assert out.type is TestType.WORDS
    assert out.language is TestLanguage.SPANISH
    assert out.words == 50
    assert out.punctuated is True
    assert out.created_at == created
    assert out.model_dump(mode="json")["type"] == "words"


def test_parse_user_maps_badge_and_provider():
    user = User(
        id=3,
        username="racer",
        email="racer@test.com",
        image=None,
        badge="PRO",
        auth_provider="DISCORD",
        created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
    )
    out = parse_user(user)
    assert out.badge is UserBadge.PRO
    assert out.auth_provider is AuthProvider.DISCORD
    assert "email" not in out.model_dump()


def test_parse_user_settings_defaults_to_line_caret():
    assert parse_user_settings(None).caret_style is CaretStyle.LINE
    assert parse_user_settings(UserSettings(user_id=1, caret_style="BLOCK")).caret_style is CaretStyle.BLOCK
