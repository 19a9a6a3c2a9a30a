"""
Request authentication package.

Contains the AuthenticationGate used as a FastAPI dependency on protected
routes. It strips the ``Bearer`` scheme, validates the access token and
exposes the recovered principal to the route via ``AuthContext``.
"""
