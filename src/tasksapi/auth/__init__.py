"""
tasksapi.auth

Authentication/authorization package.

Responsibilities:
- Secret hashing (bcrypt).
- Session token issuing and validation (JWT, HS256).
- The authorization gate binding a token to the tenant addressed by the request path.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing in this package touches the database; the gate is a pure decision over (token, identity, time).
