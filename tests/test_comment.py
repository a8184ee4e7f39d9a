import pytest

from sshkeykit.comment import Comment
from sshkeykit.errors import CharacterEncodingError, LengthError
from sshkeykit.wire import Reader, Writer


def test_as_str_lossy_ignores_non_utf8_data():
    comment = Comment(b"hello world\xc3\x28")
    assert comment.as_str_lossy() == "hello world"


def test_str_uses_lossy_prefix():
    assert str(Comment(b"hello world\xc3\x28")) == "hello world"


def test_as_str_rejects_invalid_utf8():
    with pytest.raises(CharacterEncodingError):
        Comment(b"hello world\xc3\x28").as_str()


def test_truncated_multibyte_sequence():
    comment = Comment("abc€".encode("utf-8")[:-1])
    assert comment.as_str_lossy() == "abc"


def test_from_str_and_bytes_are_equal():
    assert Comment("user@example.com") == Comment(b"user@example.com")
    assert Comment("user@example.com").as_str() == "user@example.com"


def test_bytes_like_inputs_are_accepted():
    assert Comment(bytearray(b"abc")).as_bytes() == b"abc"
    assert Comment(Comment("abc")) == Comment("abc")


def test_rejects_other_types():
    with pytest.raises(TypeError):
        Comment(42)


def test_empty_comment():
    comment = Comment()
    assert comment.is_empty()
    assert len(comment) == 0
    assert comment.as_str_lossy() == ""


def test_length_in_bytes():
    text = "héllo"
    comment = Comment(text)
    assert len(comment) == len(text.encode("utf-8"))
    assert not comment.is_empty()


def test_ordering_and_hash():
    assert Comment("a") < Comment("b")
    assert len({Comment("a"), Comment(b"a"), Comment("b")}) == 2


def test_encode_decode_round_trip():
    original = Comment(b"hello world\xc3\x28")
    writer = Writer()
    original.encode(writer)
    reader = Reader(writer.to_bytes())
    assert Comment.decode(reader) == original
    assert reader.is_finished()


def test_encoding_is_ssh_string():
    writer = Writer()
    Comment("abc").encode(writer)
    expected = Writer()
    expected.write_string(b"abc")
    assert writer.to_bytes() == expected.to_bytes()


def test_decode_truncated_input():
    with pytest.raises(LengthError):
        Comment.decode(Reader(b"\x00\x00"))