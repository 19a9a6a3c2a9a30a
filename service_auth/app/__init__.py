"""
Auth Service package for the Todo API.

This package exposes the FastAPI application that issues, validates and
refreshes bearer tokens. It is intentionally small and focused:

- app.main: Application entrypoint that wires routes and lifecycle.
- app.tokens: Claims model, token issuer and refresh exchange.
- app.validation: Signature and expiry checks for presented tokens.
- app.auth: Bearer-token gate used as a dependency on protected routes.

Design notes:
- Keep the package import side-effects minimal; reading the signing secret
  happens when AuthService is constructed, never at import time.
- Use the shared/ utilities for config, logging, metrics and errors.
- Treat this package as stateless; a token is the only record of itself.
"""
