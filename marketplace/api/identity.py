# This file resolves the calling profile from the identification header.
# Resolution fails closed: a missing, malformed, or unknown identifier is always a 401.

from __future__ import annotations

import logging

from marketplace.api.entities import Profile
from marketplace.api.error_handlers import UnauthorizedError
from marketplace.api.repositories.profile_repository import ProfileRepository

LOGGER = logging.getLogger("api")


class IdentityResolver:
    """Map a caller-supplied profile identifier to a stored Profile."""

    def __init__(self, *, profiles: ProfileRepository) -> None:
        self.profiles = profiles

    def resolve(self, raw_identifier: str | None) -> Profile:
        if raw_identifier is None or not raw_identifier.strip():
            raise UnauthorizedError()
        try:
            profile_id = int(raw_identifier.strip())
        except ValueError as exc:
            raise UnauthorizedError() from exc

        profile = self.profiles.get(profile_id)
        if profile is None:
            LOGGER.info("unknown caller profile_id=%s", profile_id)
            raise UnauthorizedError()
        return profile
