import uuid

from facultyeval.core.tokens import make_token, parse_token


def test_token_round_trips_to_the_same_user():
    uid = uuid.uuid4()
    token = make_token(uid)
    assert parse_token(token) == uid
    # grouping dashes and case are not significant
    assert parse_token(token.replace("-", "").lower()) == uid


def test_tampered_token_is_rejected():
    raw = make_token(uuid.uuid4()).replace("-", "")
    # a character inside the signature part
    swapped = "A" if raw[35] != "A" else "B"
    forged = raw[:35] + swapped + raw[36:]
    assert parse_token(forged) is None


def test_garbage_is_rejected():
    assert parse_token("") is None
    assert parse_token("not-a-token!") is None
    assert parse_token("AAAA") is None
