"""Gemini access package.

Architectural role:
    Provides configuration, request-payload construction, and the transport
    client used by the HTTP layer to invoke the external model service.

Module split:
    - `provider_config`: environment-driven immutable configuration.
    - `service`: prompt-to-payload adapter and JSON decoding.
    - `client`: HTTP transport and response-envelope parsing.
"""
