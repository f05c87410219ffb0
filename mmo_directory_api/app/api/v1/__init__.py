"""
Version 1 of the directory API.

Breaking changes should be introduced in a new version subpackage
(e.g. ``v2``) to keep existing frontends working.
"""
