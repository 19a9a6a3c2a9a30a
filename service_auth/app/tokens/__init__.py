"""
Token issuance package.

Holds the signed claims model and the two operations that mint tokens:

- claims: Principal, TokenKind, Claims and the TokenPair handed to callers.
- issuer: Signs access and refresh tokens with the process secret (HS256).
- refresh: Exchanges a refresh token for a fresh pair.

Nothing here keeps state between calls; the signing secret is the only
shared value and it never changes after startup. Keep this module free of
imports: validation depends on claims, and refresh depends on validation.
"""
