import pytest

from sshkeykit.algorithm import (
    Algorithm,
    AlgorithmKind,
    EcdsaCurve,
    HashAlg,
    KdfAlg,
)
from sshkeykit.algorithm_name import AlgorithmName
from sshkeykit.errors import EncodingError, LabelError

STANDARD_NAMES = [
    "ecdsa-sha2-nistp256",
    "ecdsa-sha2-nistp384",
    "ecdsa-sha2-nistp521",
    "ssh-dss",
    "ssh-ed25519",
    "ssh-rsa",
    "rsa-sha2-256",
    "rsa-sha2-512",
]


@pytest.mark.parametrize("name", STANDARD_NAMES)
def test_parse_round_trip(name):
    alg = Algorithm.new(name)
    assert alg.as_str() == name
    assert str(alg) == name
    assert alg.kind is not AlgorithmKind.OTHER


@pytest.mark.parametrize("name", STANDARD_NAMES)
def test_certificate_type_round_trip(name):
    alg = Algorithm.new(name)
    cert = alg.to_certificate_type()
    assert "-cert-v01" in cert
    assert cert.startswith(name)
    assert Algorithm.new_certificate(cert) == alg


def test_ecdsa_variants():
    alg = Algorithm.new("ecdsa-sha2-nistp384")
    assert alg.is_ecdsa()
    assert alg.curve is EcdsaCurve.NIST_P384
    assert not alg.is_rsa()


def test_rsa_variants():
    assert Algorithm.new("ssh-rsa").hash is None
    assert Algorithm.new("rsa-sha2-256").hash is HashAlg.SHA256
    assert Algorithm.new("rsa-sha2-512").hash is HashAlg.SHA512
    assert Algorithm.new("rsa-sha2-512").is_rsa()


def test_predicates():
    assert Algorithm.new("ssh-dss").is_dsa()
    assert Algorithm.new("ssh-ed25519").is_ed25519()
    assert not Algorithm.new("ssh-ed25519").is_dsa()


def test_default_is_ed25519():
    assert Algorithm() == Algorithm.new("ssh-ed25519")


def test_security_key_algorithms_round_trip():
    for kind in (AlgorithmKind.SK_ED25519, AlgorithmKind.SK_ECDSA_SHA2_NISTP256):
        alg = Algorithm(kind)
        assert Algorithm.new(alg.as_str()) == alg
        assert Algorithm.new_certificate(alg.to_certificate_type()) == alg


def test_other_algorithm():
    alg = Algorithm.new("foo@example.com")
    assert alg.kind is AlgorithmKind.OTHER
    assert alg.name == AlgorithmName("foo@example.com")
    assert alg.as_str() == "foo@example.com"
    assert alg.to_certificate_type() == "foo-cert-v01@example.com"
    assert Algorithm.new_certificate(alg.to_certificate_type()) == alg


def test_unknown_algorithm_without_domain_is_error():
    with pytest.raises(LabelError):
        Algorithm.new("not-an-algorithm")


def test_unknown_certificate_without_suffix_is_error():
    with pytest.raises(LabelError):
        Algorithm.new_certificate("foo@example.com")


def test_label_error_is_encoding_error():
    with pytest.raises(EncodingError):
        Algorithm.new("")


def test_inconsistent_construction_rejected():
    with pytest.raises(ValueError):
        Algorithm(AlgorithmKind.ECDSA)
    with pytest.raises(ValueError):
        Algorithm(AlgorithmKind.DSA, hash=HashAlg.SHA256)


@pytest.mark.parametrize("curve", list(EcdsaCurve))
def test_curve_round_trip(curve):
    assert EcdsaCurve.new(str(curve)) is curve


def test_curve_field_sizes():
    assert EcdsaCurve.NIST_P256.field_size() == 32
    assert EcdsaCurve.NIST_P384.field_size() == 48
    assert EcdsaCurve.NIST_P521.field_size() == 66


def test_curve_unknown():
    with pytest.raises(LabelError):
        EcdsaCurve.new("nistp999")


def test_hash_alg_parse():
    assert HashAlg.new("sha256") is HashAlg.SHA256
    assert HashAlg.new("sha512") is HashAlg.SHA512
    with pytest.raises(LabelError):
        HashAlg.new("md5")


@pytest.mark.parametrize(("name", "size"), [("sha256", 32), ("sha512", 64)])
def test_hash_digest_size_matches_output(name, size):
    hash_alg = HashAlg.new(name)
    digest = hash_alg.digest(b"message")
    assert len(digest) == size
    assert len(digest) == hash_alg.digest_size()
    assert digest == HashAlg.new(name).digest(b"message")
    assert digest != hash_alg.digest(b"other message")


def test_digest_sizes():
    assert HashAlg.SHA256.digest_size() == 32
    assert HashAlg.SHA512.digest_size() == 64


def test_kdf_alg():
    assert KdfAlg.new("none").is_none()
    assert not KdfAlg.new("bcrypt").is_none()
    assert str(KdfAlg.BCRYPT) == "bcrypt"
    with pytest.raises(LabelError):
        KdfAlg.new("scrypt")