"""BaseService — foundation for wikigraph services.

Every service receives the session :class:`Vault` at construction time and
reaches the store, resolver, and link index through it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wikigraph.infrastructure.vault import Vault

NO_VAULT_WARNING = "No vault configured"


class BaseService:
    """Base for service-layer classes.

    Usage::

        class LinkService(BaseService):
            def index_stats(self) -> ServiceResult:
                stats = self._vault.index.stats()
                ...
    """

    def __init__(self, vault: Vault) -> None:
        self._vault = vault

    def _config_warnings(self) -> list[str]:
        """Warnings for a session without a configured vault.

        A missing vault is never an error: operations return empty data
        and carry this warning instead.
        """
        return [] if self._vault.root else [NO_VAULT_WARNING]
