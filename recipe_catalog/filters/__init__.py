"""
Filter composition layer.

Responsibilities:
- Normalize REST parameters, JSON-RPC tool arguments and translated chat
  requests into one protocol-agnostic FilterSpec.
- Hold the read-only table of dietary presets.
- Compose presets and caller filters into a parameterized recipe query.
- Hydrate raw store rows back into structured Recipe records.
"""
