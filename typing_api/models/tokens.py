"""Enum tokens as stored in the database. API-facing enums live in typing_api.schemas.enums."""

TEST_TYPE_TOKENS = ("TIME", "WORDS")
TEST_LANGUAGE_TOKENS = ("ENGLISH", "SPANISH")
CARET_STYLE_TOKENS = ("LINE", "BLOCK", "HOLLOW")
USER_BADGE_TOKENS = ("DEFAULT", "PRO", "TESTER")
AUTH_PROVIDER_TOKENS = ("DEFAULT", "DISCORD", "GITHUB", "GOOGLE")
