"""
Token validation package.

Verifies tokens minted by the Auth service's own issuer. Responsibilities:

- Splitting the compact form and rejecting anything that is not three
  non-empty base64url segments.
- Checking the HS256 signature against the process secret before any
  claim is trusted.
- Enforcing the not-before / expiry window against a caller-supplied clock.

Validation is stateless: there is no key cache, no database lookup and no
revocation list. A token is valid until its own expiry.
"""
