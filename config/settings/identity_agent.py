from config.env import env

# Host segment of locally minted did:web identifiers
DID_DOMAIN_HOST = env("DID_DOMAIN_HOST", default="did.localhost")

# local | http
IDENTITY_AGENT = {
    "BACKEND": env("IDENTITY_AGENT_BACKEND", default="local"),
    "URL": env("IDENTITY_AGENT_URL", default="http://localhost:9080"),
    "METHOD": env("IDENTITY_AGENT_METHOD", default="key"),
    "TOKEN": env("IDENTITY_AGENT_TOKEN", default=""),
    "HTTP_TIMEOUT": env.float("IDENTITY_AGENT_HTTP_TIMEOUT", default=10.0),
    # Upper bound a caller waits on external resolution before UNAVAILABLE
    "RESOLVE_TIMEOUT": env.float("IDENTITY_AGENT_RESOLVE_TIMEOUT", default=5.0),
    "RESOLVER_WORKERS": env.int("IDENTITY_AGENT_RESOLVER_WORKERS", default=4),
}

# Optional service entry added to every freshly created DID document
DID_DEFAULT_SERVICE_ENDPOINT = env("DID_DEFAULT_SERVICE_ENDPOINT", default="")
