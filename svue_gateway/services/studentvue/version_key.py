# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Provider for the ``edupointkeyversion`` cookie value.

StudentVue rejects SOAP calls whose cookie header lacks a current
``edupointkeyversion``. The value is either configured statically or
fetched as plain text from a key service URL.
"""

import logging

import httpx

from svue_gateway.core.config.settings import StudentVueSettings
from svue_gateway.services.studentvue.exceptions import AccessKeyError

logger = logging.getLogger(__name__)


class VersionKeyProvider:
    """Supplies the edupoint version key for upstream requests.

    Attributes:
        static_key: Key from configuration, used without any network call.
        key_url: URL serving the current key as plain text.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        static_key: str | None = None,
        key_url: str | None = None,
    ):
        """Initialize the provider.

        Args:
            http_client: Shared HTTP client used to fetch the key.
            static_key: Fixed key; when set, key_url is never contacted.
            key_url: URL of the key service.
        """
        self._http = http_client
        self.static_key = static_key
        self.key_url = key_url

    @classmethod
    def from_settings(
        cls,
        http_client: httpx.AsyncClient,
        settings: StudentVueSettings,
    ) -> "VersionKeyProvider":
        """Build a provider from StudentVue settings."""
        return cls(
            http_client,
            static_key=settings.version_key,
            key_url=settings.version_key_url,
        )

    async def get_key(self) -> str:
        """Get the current version key.

        Returns:
            The key text, whitespace-trimmed.

        Raises:
            AccessKeyError: If no key is configured and the key service
                cannot be reached or returns an error or an empty body.
        """
        if self.static_key:
            return self.static_key

        if not self.key_url:
            raise AccessKeyError()

        try:
            response = await self._http.get(self.key_url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("Version key service returned %d", e.response.status_code)
            raise AccessKeyError() from e
        except httpx.HTTPError as e:
            logger.error("Version key service unreachable: %s", type(e).__name__)
            raise AccessKeyError() from e

        key = response.text.strip()
        if not key:
            logger.error("Version key service returned an empty body")
            raise AccessKeyError()

        return key
