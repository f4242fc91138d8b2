"""
┌──────────────────────────────┐
│   DID API (ninja controllers)│
│  - create / read / history   │
│  - update / deactivate       │
└──────────────┬───────────────┘
               │ (identity, principal, mutation)
┌──────────────▼───────────────┐
│   Version Chain Manager      │
│  chain.py                    │
│  read → authorize → mutate   │
│  → compare-and-swap commit   │
└───────┬──────────────┬───────┘
        │              │
┌───────▼──────┐ ┌─────▼────────┐
│ Ownership    │ │ Mutators     │
│ Gate         │ │ (pure)       │
│ policies.py  │ │ mutators.py  │
└───────┬──────┘ └──────────────┘
        │
┌───────▼──────────────────────┐
│   Document Store             │
│  models / selectors /        │
│  services (CAS primitives)   │
└──────────────────────────────┘

Reads go through resolver.services.IdentityResolver, which falls back to the
external identity agent (agent/) when the store has no active version.
"""
