"""Prompting package.

Deterministic prompt and response-schema construction for each proxy endpoint.
It does not validate requests or invoke the model.
"""
