"""
Basic usage examples for tls_config package.

This package decides, per connection attempt, whether TLS is disabled,
required or optional, and which options the TLS engine gets.
"""
import os
import sys
import types
from tls_config import (
    Closure,
    DynamicCall,
    ProviderError,
    ProviderOk,
    StaticConfig,
    TlsConfigError,
    TlsMode,
    build_ssl_context,
    load_tls_config,
    resolve_tls_config,
)


# =============================================================================
# Example 1: TLS disabled (default)
# =============================================================================
def example1_disabled() -> None:
    """
    With enabled=False nothing else is read and the provider is never called.
    """
    config = StaticConfig(optional=True, base_options=[("certfile", "/etc/ssl/client.pem")])

    decision = resolve_tls_config(config)
    print(f"Example 1 - Disabled: {decision.mode.value}")
    # Output: "disabled"


# =============================================================================
# Example 2: Required and optional TLS
# =============================================================================
def example2_required_and_optional() -> None:
    """
    optional=False rejects plaintext fallback, optional=True permits it.
    """
    base = [("cafile", "/etc/ssl/ca.pem"), ("verify", "required")]

    required = resolve_tls_config(StaticConfig(enabled=True, base_options=base))
    optional = resolve_tls_config(StaticConfig(enabled=True, optional=True, base_options=base))

    print(f"Example 2 - Required: {required.mode.value}, plaintext allowed: {required.allows_plaintext}")
    print(f"Example 2 - Optional: {optional.mode.value}, plaintext allowed: {optional.allows_plaintext}")


# =============================================================================
# Example 3: Provider options take precedence
# =============================================================================
def example3_provider_precedence() -> None:
    """
    Provider options are placed in front of the base options, so a lookup
    finds the provider value first.
    """
    def fetch_rotated_cert() -> ProviderOk:
        # In a real app this would read from a secret store
        return ProviderOk([("certfile", "/run/secrets/rotated.pem")])

    config = StaticConfig(
        enabled=True,
        provider=Closure(fetch_rotated_cert),
        base_options=[("certfile", "/etc/ssl/client.pem"), ("verify", "required")],
    )

    decision = resolve_tls_config(config)
    print(f"Example 3 - certfile: {decision.options.get('certfile')}")
    # Output: "/run/secrets/rotated.pem"
    print(f"Example 3 - all entries: {list(decision.options)}")


# =============================================================================
# Example 4: Provider failure aborts the connection attempt
# =============================================================================
def example4_provider_failure() -> None:
    """
    A ProviderError never falls back to plaintext or to the base options.
    """
    config = StaticConfig(
        enabled=True,
        optional=True,
        provider=Closure(lambda: ProviderError(ConnectionError("vault unreachable"))),
        base_options=[("verify", "required")],
    )

    decision = resolve_tls_config(config)
    print(f"Example 4 - Failed: {decision.mode == TlsMode.FAILED}, cause: {decision.cause!r}")

    try:
        decision.raise_for_failure()
    except TlsConfigError as e:
        print(f"  -> transport aborts: {e}")


# =============================================================================
# Example 5: DynamicCall provider
# =============================================================================
def example5_dynamic_call() -> None:
    """
    A DynamicCall names a module and function, applied to fixed arguments.
    """
    store = types.ModuleType("example_secret_store")
    store.fetch = lambda name: ProviderOk([("keyfile", f"/run/secrets/{name}.key")])
    sys.modules["example_secret_store"] = store

    config = StaticConfig(
        enabled=True,
        provider=DynamicCall("example_secret_store", "fetch", ("billing-api",)),
    )

    decision = resolve_tls_config(config)
    print(f"Example 5 - DynamicCall: {decision.options.get('keyfile')}")
    del sys.modules["example_secret_store"]


# =============================================================================
# Example 6: Loading from a config mapping and env vars
# =============================================================================
def example6_load_config() -> None:
    """
    Settings resolve from argument > env var > mapping > default. Keys the
    resolver does not own become base options.
    """
    os.environ["TLS_OPTIONAL"] = "true"

    # Simulated app.yaml section:
    # tls:
    #   enabled: true
    #   minimum_version: TLSv1_2
    #   verify: required
    yaml_tls_section = {
        "enabled": True,
        "minimum_version": "TLSv1_2",
        "verify": "required",
    }

    config = load_tls_config(yaml_tls_section)
    decision = resolve_tls_config(config)
    print(f"Example 6 - Loaded: {decision.mode.value} with {decision.options.keys()}")

    del os.environ["TLS_OPTIONAL"]


# =============================================================================
# Example 7: Building an ssl.SSLContext
# =============================================================================
def example7_ssl_context() -> None:
    """
    Turn a decision into an SSLContext for the standard library ssl module.
    """
    decision = resolve_tls_config(
        StaticConfig(enabled=True, base_options=[("minimum_version", "TLSv1_2")])
    )
    context = build_ssl_context(decision)
    print(f"Example 7 - SSLContext minimum version: {context.minimum_version.name}")

    # import asyncio
    #
    # reader, writer = await asyncio.open_connection(host, port, ssl=context)


def main() -> None:
    print("=== tls_config Examples ===\n")

    example1_disabled()
    example2_required_and_optional()
    example3_provider_precedence()
    example4_provider_failure()
    example5_dynamic_call()
    example6_load_config()
    example7_ssl_context()

    print("\n=== Examples Complete ===")


if __name__ == "__main__":
    main()
