"""
API server package — HTTP interface for the mini-app front end.

Authenticates requests from the session token, validates bodies with pydantic and
delegates to the service layer.
"""
