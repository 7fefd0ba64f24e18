# dtlsproto

`dtlsproto` reads and writes the DTLS 1.2 wire format in pure Python. It uses
only the standard library. It covers:

- **Record layer** (`dtlsproto.recordlayer`): `RecordHeader`, `RecordLayer`,
  and `unpack_datagram`, which splits a UDP datagram into its raw records.
- **Content types**: `ChangeCipherSpec` and `ApplicationData`
  (`dtlsproto.protocol`), `Alert` (`dtlsproto.alert`) and `Handshake`
  (`dtlsproto.handshake.handshake`).
- **Handshake messages** (`dtlsproto.handshake.*`): `MessageClientHello`,
  `MessageServerHello`, `MessageHelloVerifyRequest`, `MessageCertificate`,
  `MessageCertificateRequest`, `MessageCertificateVerify`,
  `MessageServerKeyExchange`, `MessageClientKeyExchange`,
  `MessageServerHelloDone` and `MessageFinished`. The handshake header,
  `Random` and cipher suite id lists are in `dtlsproto.handshake.base`.
- **Hello extensions** (`dtlsproto.extensions.*`): `ServerName`, `ALPN`,
  `UseSRTP`, `SupportedEllipticCurves`, `SupportedPointFormats`,
  `SupportedSignatureAlgorithms`, `UseExtendedMasterSecret` and
  `RenegotiationInfo`. `marshal_extensions` and `unmarshal_extensions` in
  `dtlsproto.extensions.codec` handle a whole extensions block.
- **Negotiation helpers**: `alpn_protocol_selection`
  (`dtlsproto.extensions.alpn`) and, in `dtlsproto.negotiation`,
  `find_matching_srtp_profile`, `find_matching_cipher_suite`, `split_bytes`,
  `Session` and an in-memory `SessionStore`.

## Installation

```
pip install dtlsproto
```

## Usage

Every message type has a `marshal()` method that returns `bytes` and an
`unmarshal(data)` classmethod that builds a new object from `bytes`.

### Splitting a datagram into records

```python
from dtlsproto.recordlayer import RecordLayer, unpack_datagram

datagram = bytes.fromhex("14feff0000000000000012000101")
for raw in unpack_datagram(datagram):
    record = RecordLayer.unmarshal(raw)
    print(record.header.sequence_number, record.content)
```

Record headers are only accepted with DTLS 1.0 or 1.2 versions.
`RecordLayer.marshal()` and `Handshake.marshal()` refresh the lengths and
type in their header before encoding it.

### Alerts

```python
from dtlsproto.alert import Alert, Description, Level

alert = Alert(Level.FATAL, Description.UNEXPECTED_MESSAGE)
assert alert.marshal() == b"\x02\x0a"
assert Alert.unmarshal(b"\x02\x0a") == alert
```

### Handshake messages

A `ServerKeyExchange` or `ClientKeyExchange` body can only be decoded once the
key exchange algorithm of the chosen cipher suite is known, so it is passed to
`unmarshal`:

```python
from dtlsproto.handshake.client_key_exchange import (
    KeyExchangeAlgorithm,
    MessageClientKeyExchange,
)
from dtlsproto.handshake.handshake import Handshake

message = MessageClientKeyExchange(public_key=bytes(32))
raw = Handshake(message=message).marshal()

decoded = Handshake.unmarshal(raw, KeyExchangeAlgorithm.ECDHE)
assert decoded.message.public_key == bytes(32)
```

`Random.generate()` gives a fresh hello random value holding the current time
and 28 bytes from `secrets`.

### Extensions

```python
from dtlsproto.extensions.alpn import ALPN, alpn_protocol_selection
from dtlsproto.extensions.codec import marshal_extensions, unmarshal_extensions

raw = marshal_extensions([ALPN(["h2", "http/1.1"])])
extensions = unmarshal_extensions(raw)

chosen = alpn_protocol_selection(["http/1.1"], ["h2", "http/1.1"])  # "http/1.1"
```

`unmarshal_extensions` decodes `ServerName`, `SupportedEllipticCurves`,
`UseSRTP`, `ALPN`, `UseExtendedMasterSecret` and `RenegotiationInfo`; other
extension types in the block are skipped. Decoders drop curves, profiles and
algorithms they do not know.

## Errors

Every failure raises a subclass of `dtlsproto.errors.DTLSError`:

- `FatalError`: the connection cannot continue.
- `InternalError`: an implementation limit was hit.
- `TemporaryError`: the request failed, but the connection is still usable
  (for example `BufferTooSmallError`).
- `DTLSTimeoutError`: an operation timed out.
- `HandshakeError`: the handshake failed; its `timeout()` and `temporary()`
  follow the error it wraps.

Each error has `timeout()` and `temporary()` methods, so callers can decide
whether to retry.

## What this package does not do

It encodes and decodes messages only. It does not open connections, run the
handshake state machine, derive keys, encrypt or decrypt records, or detect
replays. `SessionStore` keeps sessions in memory only; subclass it to store
them elsewhere.

## Development

```
pip install -e ".[test]"
pytest
```