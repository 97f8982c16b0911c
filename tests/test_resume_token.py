import base64
import json

import pytest

from speedread.domain.resume_token import (
    MalformedTokenError,
    ResumeToken,
    ResumeTokenError,
    UnsupportedVersionError,
    decode_resume_token,
    encode_resume_token,
)


def _raw_token(payload_text: str, prefix: str = "sr1.") -> str:
    body = base64.urlsafe_b64encode(payload_text.encode("utf-8")).rstrip(b"=").decode("ascii")
    return prefix + body


def test_encode_produces_exact_wire_format():
    token = encode_resume_token(ResumeToken(fingerprint="abc123", index=42))

    assert token == _raw_token('{"v":1,"fp":"abc123","i":42}')
    assert "=" not in token
    assert "+" not in token and "/" not in token


def test_round_trip_keeps_required_and_advisory_fields():
    original = ResumeToken(
        fingerprint="abc123",
        index=42,
        track_name="Bücher.txt",
        word_at_export="naïve",
    )

    decoded = decode_resume_token(encode_resume_token(original))

    assert decoded == original
    assert decode_resume_token(encode_resume_token(ResumeToken("abc123", 42))) == ResumeToken(
        "abc123", 42
    )


def test_encoded_body_uses_url_safe_alphabet():
    token = encode_resume_token(ResumeToken(fingerprint="ff", index=0, word_at_export="~~~???>>>"))
    body = token[len("sr1.") :]

    assert set(body) <= set("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_")
    assert decode_resume_token(token).word_at_export == "~~~???>>>"


def test_decode_ignores_surrounding_whitespace():
    token = encode_resume_token(ResumeToken("abc", 3))

    assert decode_resume_token(f"  {token}\n").index == 3


@pytest.mark.parametrize(
    "text",
    [
        "",
        "garbage",
        "sr2." + "eyJ2IjoxfQ",
        "SR1.eyJ2IjoxfQ",
        "sr1.",
        "sr1.!!!!",
        "sr1.ab+/",
        "sr1.A",
    ],
)
def test_decode_rejects_bad_prefix_or_encoding(text):
    with pytest.raises(MalformedTokenError):
        decode_resume_token(text)


def test_decode_rejects_invalid_utf8_and_json():
    invalid_utf8 = "sr1." + base64.urlsafe_b64encode(b"\xff\xfe\xfd").rstrip(b"=").decode()

    with pytest.raises(MalformedTokenError):
        decode_resume_token(invalid_utf8)
    with pytest.raises(MalformedTokenError):
        decode_resume_token(_raw_token("{not json"))
    with pytest.raises(MalformedTokenError):
        decode_resume_token(_raw_token("[1, 2]"))
    with pytest.raises(MalformedTokenError):
        decode_resume_token(_raw_token('{"fp":"abc","i":1}'))


@pytest.mark.parametrize("version", [2, 0, "1", 1.5, True, None])
def test_decode_rejects_unknown_versions(version):
    payload = json.dumps({"v": version, "fp": "abc", "i": 1})

    with pytest.raises(UnsupportedVersionError) as excinfo:
        decode_resume_token(_raw_token(payload))

    assert excinfo.value.version == version


def test_decode_accepts_float_spelling_of_current_version():
    decoded = decode_resume_token(_raw_token('{"v":1.0,"fp":"abc","i":1}'))

    assert decoded.version == 1
    assert isinstance(decoded.version, int)
    assert decoded.index == 1


def test_version_is_checked_before_required_fields():
    with pytest.raises(UnsupportedVersionError):
        decode_resume_token(_raw_token('{"v":2}'))


@pytest.mark.parametrize(
    "payload",
    [
        '{"v":1,"i":1}',
        '{"v":1,"fp":"","i":1}',
        '{"v":1,"fp":7,"i":1}',
        '{"v":1,"fp":"abc"}',
        '{"v":1,"fp":"abc","i":"42"}',
        '{"v":1,"fp":"abc","i":true}',
        '{"v":1,"fp":"abc","i":Infinity}',
        '{"v":1,"fp":"abc","i":NaN}',
    ],
)
def test_decode_rejects_missing_or_invalid_required_fields(payload):
    with pytest.raises(MalformedTokenError):
        decode_resume_token(_raw_token(payload))


def test_decode_truncates_fractional_index_and_ignores_bad_advisory_fields():
    decoded = decode_resume_token(_raw_token('{"v":1,"fp":"abc","i":42.9,"n":5,"w":["x"]}'))

    assert decoded.index == 42
    assert decoded.track_name is None
    assert decoded.word_at_export is None


def test_all_rejections_share_a_value_error_base():
    assert issubclass(MalformedTokenError, ResumeTokenError)
    assert issubclass(UnsupportedVersionError, ResumeTokenError)
    assert issubclass(ResumeTokenError, ValueError)
