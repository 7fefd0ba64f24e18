"""The handshake record content: a header followed by one message."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable, ClassVar, Optional, Union

from ..protocol import ContentType
from .base import (
    HEADER_LENGTH,
    HandshakeHeader,
    HandshakeMessageUnsetError,
    HandshakeType,
    LengthMismatchError,
    NotImplementedFeatureError,
    UnableToMarshalFragmentedError,
)
from .certificate import MessageCertificate
from .certificate_request import MessageCertificateRequest
from .certificate_verify import MessageCertificateVerify
from .client_hello import MessageClientHello
from .client_key_exchange import KeyExchangeAlgorithm, MessageClientKeyExchange
from .finished import MessageFinished
from .hello_verify_request import MessageHelloVerifyRequest
from .server_hello import MessageServerHello
from .server_hello_done import MessageServerHelloDone
from .server_key_exchange import MessageServerKeyExchange

Message = Union[
    MessageClientHello,
    MessageHelloVerifyRequest,
    MessageServerHello,
    MessageCertificate,
    MessageServerKeyExchange,
    MessageCertificateRequest,
    MessageServerHelloDone,
    MessageClientKeyExchange,
    MessageFinished,
    MessageCertificateVerify,
]

_Decoder = Callable[[bytes, KeyExchangeAlgorithm], Message]

_DECODERS: dict[int, _Decoder] = {
    HandshakeType.CLIENT_HELLO: lambda data, _: MessageClientHello.unmarshal(data),
    HandshakeType.HELLO_VERIFY_REQUEST: lambda data, _: MessageHelloVerifyRequest.unmarshal(
        data
    ),
    HandshakeType.SERVER_HELLO: lambda data, _: MessageServerHello.unmarshal(data),
    HandshakeType.CERTIFICATE: lambda data, _: MessageCertificate.unmarshal(data),
    HandshakeType.SERVER_KEY_EXCHANGE: MessageServerKeyExchange.unmarshal,
    HandshakeType.CERTIFICATE_REQUEST: lambda data, _: MessageCertificateRequest.unmarshal(
        data
    ),
    HandshakeType.SERVER_HELLO_DONE: lambda data, _: MessageServerHelloDone.unmarshal(data),
    HandshakeType.CLIENT_KEY_EXCHANGE: MessageClientKeyExchange.unmarshal,
    HandshakeType.FINISHED: lambda data, _: MessageFinished.unmarshal(data),
    HandshakeType.CERTIFICATE_VERIFY: lambda data, _: MessageCertificateVerify.unmarshal(
        data
    ),
}


@dataclass
class Handshake:
    """A handshake message together with its header."""

    content_type: ClassVar[ContentType] = ContentType.HANDSHAKE

    header: HandshakeHeader = field(default_factory=HandshakeHeader)
    message: Optional[Message] = None
    key_exchange_algorithm: KeyExchangeAlgorithm = KeyExchangeAlgorithm.NONE

    def marshal(self) -> bytes:
        """Encode header and message; the header's lengths and type are refreshed."""
        if self.message is None:
            raise HandshakeMessageUnsetError()
        if self.header.fragment_offset != 0:
            raise UnableToMarshalFragmentedError()

        body = self.message.marshal()
        self.header = replace(
            self.header,
            length=len(body),
            fragment_length=len(body),
            type=self.message.handshake_type,
        )
        return self.header.marshal() + body

    @classmethod
    def unmarshal(
        cls,
        data: bytes,
        key_exchange_algorithm: KeyExchangeAlgorithm = KeyExchangeAlgorithm.NONE,
    ) -> "Handshake":
        data = bytes(data)
        header = HandshakeHeader.unmarshal(data)
        if len(data) - HEADER_LENGTH != header.length:
            raise LengthMismatchError()
        if header.length != header.fragment_length:
            raise LengthMismatchError()

        decoder = _DECODERS.get(data[0])
        if decoder is None:
            raise NotImplementedFeatureError()
        message = decoder(data[HEADER_LENGTH:], key_exchange_algorithm)
        return cls(
            header=header,
            message=message,
            key_exchange_algorithm=key_exchange_algorithm,
        )