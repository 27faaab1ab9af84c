"""Identifier normalization shared by lookups and rate limiting."""


def normalize_identifier(identifier: str) -> str:
    """Trim and case-fold an email or username.

    Two identifiers that normalize to the same string are the same principal.
    """
    return identifier.strip().lower()
