import base64
import json
import re

from bakalari_mock.storage import User
from bakalari_mock.tokens import TOKEN_BYTES, campaign_category_code, generate_token


URLSAFE = re.compile(r"^[A-Za-z0-9_\-]+=*$")


def test_token_is_urlsafe_base64_of_expected_size():
    token = generate_token()

    assert URLSAFE.match(token)
    assert len(base64.urlsafe_b64decode(token)) == TOKEN_BYTES


def test_tokens_are_unique_under_volume():
    tokens = {generate_token() for _ in range(10_000)}

    assert len(tokens) == 10_000


def test_new_user_gets_distinct_tokens():
    user = User(name="novak", class_name="4.A")

    assert user.refresh_token != user.access_token


def test_campaign_category_code_decodes():
    decoded = json.loads(base64.urlsafe_b64decode(campaign_category_code()))

    assert decoded == {"sid": "1234", "ut": 69, "sy": 1}
