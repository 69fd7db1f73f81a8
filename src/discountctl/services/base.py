"""BaseService — shared foundation for discountctl services.

Every service receives the process-wide :class:`DiscountSettings` at
construction time and treats it as read-only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from discountctl.config.settings import DiscountSettings


class BaseService:
    """Base for service-layer classes.

    Usage::

        class DiscountService(BaseService):
            def run(self, run_input: RunInput) -> ServiceResult:
                rule = self._settings.rule
                ...
    """

    def __init__(self, settings: DiscountSettings) -> None:
        self._settings = settings

    @property
    def key_hex(self) -> str:
        return self._settings.crypto.key_hex.get_secret_value()

    @property
    def iv_hex(self) -> str:
        return self._settings.crypto.iv_hex.get_secret_value()
