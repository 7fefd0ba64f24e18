from dtlsproto.handshake.base import HandshakeType
from dtlsproto.handshake.server_hello_done import MessageServerHelloDone


def test_server_hello_done_unmarshal():
    assert MessageServerHelloDone.unmarshal(b"") == MessageServerHelloDone()


def test_server_hello_done_marshal():
    assert MessageServerHelloDone.unmarshal(b"").marshal() == b""


def test_server_hello_done_type():
    message = MessageServerHelloDone.unmarshal(b"")
    assert message.handshake_type == HandshakeType.SERVER_HELLO_DONE
    assert int(message.handshake_type) == 14