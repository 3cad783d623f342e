"""Core contracts shared by the API and LLM layers.

Module split:
    - `errors`: exception hierarchy translated to HTTP status at the boundary.
    - `result`: success/failure values returned by the model call wrapper.
    - `schemas`: request and response shapes validated with pydantic.
"""
