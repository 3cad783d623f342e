"""HTTP adapter package.

Architectural role:
- Defines the external interaction boundary (FastAPI application).
- Performs transport-level validation and response shaping.
- Delegates model invocation to `campaign_proxy.llm`.
"""
