"""Encoding and decoding of the DTLS 1.2 wire format: records, handshakes, alerts and extensions."""

__version__ = "0.1.0"