"""Leaderboard domain services: signed submissions, ranking and resets.

This package holds the transport-free core that the HTTP blueprints and
socket handlers call into. Storage is reached only through a
`LeaderboardStore` passed in by the caller.
"""
