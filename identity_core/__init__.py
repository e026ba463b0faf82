"""Identity Core — users, credentials, sessions and schema migrations behind a JSON API.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
