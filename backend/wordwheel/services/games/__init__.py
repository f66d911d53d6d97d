"""Game engine: timer expiry, answer scoring, advancement and projection.

Functions here operate on one SessionState at a time and hold no state of
their own. Locking is the SessionStore's job; transport concerns live in
the Socket.IO handlers.
"""
