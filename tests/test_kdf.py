import pytest

from sshkeykit.algorithm import KdfAlg
from sshkeykit.errors import (
    AlgorithmUnknownError,
    CryptoError,
    DecryptedError,
    LabelError,
    TrailingDataError,
)
from sshkeykit.kdf import DEFAULT_BCRYPT_ROUNDS, DEFAULT_SALT_SIZE, Kdf
from sshkeykit.wire import Reader, Writer


def _encode(kdf):
    writer = Writer()
    kdf.encode(writer)
    return writer.to_bytes()


def _fixed_rng(n):
    return bytes(range(n))


def test_default_is_none():
    kdf = Kdf()
    assert kdf.is_none()
    assert not kdf.is_some()
    assert not kdf.is_bcrypt()
    assert kdf.algorithm() is KdfAlg.NONE


def test_none_encoding():
    encoded = _encode(Kdf())
    assert encoded == b"\x00\x00\x00\x04none\x00\x00\x00\x00"
    assert Kdf().encoded_len() == len(encoded)
    assert Kdf.decode(Reader(encoded)) == Kdf()


def test_new_bcrypt():
    kdf = Kdf.new(KdfAlg.BCRYPT, _fixed_rng)
    assert kdf.is_bcrypt()
    assert kdf.algorithm() is KdfAlg.BCRYPT
    assert kdf.salt == _fixed_rng(DEFAULT_SALT_SIZE)
    assert kdf.rounds == DEFAULT_BCRYPT_ROUNDS


def test_new_uses_random_salt_by_default():
    first = Kdf.new(KdfAlg.BCRYPT)
    second = Kdf.new(KdfAlg.BCRYPT)
    assert len(first.salt) == DEFAULT_SALT_SIZE
    assert first.salt != second.salt


def test_new_none_rejected():
    with pytest.raises(AlgorithmUnknownError):
        Kdf.new(KdfAlg.NONE, _fixed_rng)


def test_short_rng_output_rejected():
    with pytest.raises(CryptoError):
        Kdf.new(KdfAlg.BCRYPT, lambda n: b"")


def test_bcrypt_round_trip():
    kdf = Kdf(salt=b"saltsaltsaltsalt", rounds=16)
    encoded = _encode(kdf)
    assert kdf.encoded_len() == len(encoded)
    assert Kdf.decode(Reader(encoded)) == kdf


def test_bcrypt_encoding_layout():
    kdf = Kdf(salt=b"ab", rounds=16)
    encoded = _encode(kdf)
    reader = Reader(encoded)
    assert reader.read_utf8() == "bcrypt"
    assert reader.read_uint32() == 8 + len(b"ab")
    assert reader.read_string() == b"ab"
    assert reader.read_uint32() == 16
    assert reader.is_finished()


def test_decode_none_with_options_rejected():
    writer = Writer()
    writer.write_utf8("none")
    writer.write_uint32(4)
    with pytest.raises(AlgorithmUnknownError):
        Kdf.decode(Reader(writer.to_bytes()))


def test_decode_unknown_name_rejected():
    writer = Writer()
    writer.write_utf8("scrypt")
    writer.write_uint32(0)
    with pytest.raises(LabelError):
        Kdf.decode(Reader(writer.to_bytes()))


def test_decode_trailing_option_bytes_rejected():
    inner = Writer()
    inner.write_string(b"salt")
    inner.write_uint32(16)
    inner.write_bytes(b"\x00")
    writer = Writer()
    writer.write_utf8("bcrypt")
    writer.write_string(inner.to_bytes())
    with pytest.raises(TrailingDataError):
        Kdf.decode(Reader(writer.to_bytes()))


def test_derive_is_deterministic():
    kdf = Kdf(salt=b"saltsaltsaltsalt", rounds=2)
    key = kdf.derive("password", 48)
    assert len(key) == 48
    assert kdf.derive(b"password", 48) == key
    assert kdf.derive("secret", 48) != key


def test_derive_depends_on_salt():
    password = "password"
    a = Kdf(salt=b"saltsaltsaltsalt", rounds=2).derive(password, 32)
    b = Kdf(salt=b"SALTSALTSALTSALT", rounds=2).derive(password, 32)
    assert a != b


def test_derive_none_rejected():
    with pytest.raises(DecryptedError):
        Kdf().derive("password", 32)


def test_derive_empty_password_rejected():
    with pytest.raises(CryptoError):
        Kdf(salt=b"saltsaltsaltsalt", rounds=2).derive(b"", 32)


def test_inconsistent_construction_rejected():
    with pytest.raises(ValueError):
        Kdf(salt=b"salt")