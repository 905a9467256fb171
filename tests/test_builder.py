"""Tests for msgkit.message.MessageBuilder — mutable staging for a Message."""

from msgkit.headers import AbstractHeaders, HeaderMap
from msgkit.message import Message


class TestChaining:
    def test_methods_return_same_builder(self) -> None:
        b = Message.builder()
        assert b.add_header("A", "1") is b
        assert b.replace_header("A", "2") is b
        assert b.headers(HeaderMap()) is b
        assert b.payload(b"x") is b

    def test_empty_build(self) -> None:
        msg = Message.builder().build()
        assert len(msg.headers) == 0
        assert msg.payload is None
        assert msg.to_raw() == {"headers": {}, "payload": b""}


class TestHeaders:
    def test_add_header(self) -> None:
        msg = Message.builder().add_header("Accept", "a").add_header("accept", "b", "c").build()
        assert msg.headers.to_raw() == {"Accept": {"values": ["a", "b", "c"]}}

    def test_replace_header(self) -> None:
        msg = Message.builder().add_header("Accept", "a").replace_header("ACCEPT", "b").build()
        assert msg.headers.to_raw() == {"ACCEPT": {"values": ["b"]}}

    def test_headers_replaces_everything(self) -> None:
        msg = (
            Message.builder()
            .add_header("Old", "1")
            .headers(HeaderMap().add("New", "2"))
            .build()
        )
        assert list(msg.headers) == ["New"]

    def test_headers_from_foreign(self) -> None:
        class Foreign(AbstractHeaders):
            def to_raw(self, *, preserve_values: bool = False) -> dict:
                return {"X-Foreign": {"values": ["yes"]}}

        msg = Message.builder().headers(Foreign()).build()
        assert msg.headers.get_first("x-foreign") == "yes"

    def test_headers_source_not_aliased(self) -> None:
        source = HeaderMap().add("A", "1")
        b = Message.builder().headers(source).add_header("A", "2")
        assert source.get_all("A") == ["1"]
        assert b.build().headers.get_all("A") == ["1", "2"]


class TestPayload:
    def test_last_write_wins(self) -> None:
        msg = Message.builder().payload(b"first").payload(b"second").build()
        assert msg.payload == b"second"

    def test_payload_kept_as_given(self) -> None:
        payload = {"k": "v"}
        assert Message.builder().payload(payload).build().payload is payload


class TestBuild:
    def test_build_twice_yields_equal_messages(self) -> None:
        b = Message.builder().add_header("A", "1").payload(b"x")
        first = b.build()
        second = b.build()
        assert first.to_raw() == second.to_raw()
        assert first == second

    def test_builder_reusable_after_build(self) -> None:
        b = Message.builder().add_header("A", "1")
        first = b.build()
        second = b.add_header("B", "2").build()
        assert list(first.headers) == ["A"]
        assert list(second.headers) == ["A", "B"]
