"""
Token authentication for the MediTravel API.

Login hands out both a DRF token (``Authorization: Token <key>``) and a
simplejwt pair (``Authorization: Bearer <jwt>``); settings list this
class first so clients holding the legacy token keep working.  Kept
apart from the auth views so DRF can import it while loading settings.
"""
from __future__ import annotations

from rest_framework import authentication


class TokenAuthentication(authentication.TokenAuthentication):
    """Legacy token header; logout deletes the token row."""

    keyword = 'Token'
