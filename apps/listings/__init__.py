"""Listings app package.

This app encapsulates everything related to rental listings: the
listing model, content moderation, the admission workflow that turns
an owner's submission into a stored listing, ownership checks and
availability changes, and the public search feed.
"""
