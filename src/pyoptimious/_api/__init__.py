"""Endpoint modules.

Each module turns one round trip through a :class:`~pyoptimious._transport.Transport`
into validated models.  Internal to pyoptimious and may change at any time.
"""
