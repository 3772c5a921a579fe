ENV_TLS_ENABLED = ["TLS_ENABLED"]
ENV_TLS_OPTIONAL = ["TLS_OPTIONAL"]

# Keys consumed by the resolver, never passed to the TLS engine
KEY_ENABLED = "enabled"
KEY_OPTIONAL = "optional"
KEY_PROVIDER = "provider"
KEY_CONFIGURE = "configure"
KEY_BASE_OPTIONS = "base_options"
KEY_OPTIONS = "options"

RESERVED_KEYS = (
    KEY_ENABLED,
    KEY_OPTIONAL,
    KEY_PROVIDER,
    KEY_CONFIGURE,
    KEY_BASE_OPTIONS,
    KEY_OPTIONS,
)

TRUE_STRINGS = ("true", "1", "yes", "on")
FALSE_STRINGS = ("false", "0", "no", "off")

DEFAULT_SECTION = "tls"
