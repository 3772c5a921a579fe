"""
TLS connection policy resolution.
"""
import logging

from .options import OptionList
from .provider import ProviderError, ProviderResult, invoke_provider, invoke_provider_async
from .types import Decision, StaticConfig

logger = logging.getLogger(__name__)


class ConfigResolver:
    """Decide how one connection attempt must treat TLS.

    Resolution order:
    1. ``enabled`` is False -> DISABLED (nothing else is read)
    2. Invoke the provider (none means no extra options)
    3. ProviderError -> FAILED with its cause
    4. Merge provider options in front of the base options
    5. ``optional`` -> OPTIONAL, otherwise REQUIRED

    The resolver keeps no state; every call re-invokes the provider. Faults
    raised by a provider are not caught here and reach the caller as-is.
    """

    def resolve(self, config: StaticConfig) -> Decision:
        if not config.enabled:
            logger.debug("TLS disabled")
            return Decision.disabled()

        return self._decide(config, invoke_provider(config.provider))

    async def resolve_async(self, config: StaticConfig) -> Decision:
        """Same as resolve(), awaiting async providers and running blocking ones in a thread."""
        if not config.enabled:
            logger.debug("TLS disabled")
            return Decision.disabled()

        return self._decide(config, await invoke_provider_async(config.provider))

    def _decide(self, config: StaticConfig, result: ProviderResult) -> Decision:
        if isinstance(result, ProviderError):
            logger.debug(f"TLS option provider returned an error: {type(result.cause).__name__}")
            return Decision.failed(result.cause)

        merged: OptionList = result.options + config.base_options

        if config.optional:
            logger.debug(f"TLS optional with options {merged.keys()}")
            return Decision.optional_tls(merged)

        logger.debug(f"TLS required with options {merged.keys()}")
        return Decision.required(merged)


_default_resolver = ConfigResolver()

# Module-level aliases for cleaner imports
resolve_tls_config = _default_resolver.resolve
resolve_tls_config_async = _default_resolver.resolve_async
