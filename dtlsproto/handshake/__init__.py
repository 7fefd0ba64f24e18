"""DTLS handshake header, random value and handshake message types."""