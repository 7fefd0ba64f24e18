"""TLS hello extensions carried in ClientHello and ServerHello messages."""