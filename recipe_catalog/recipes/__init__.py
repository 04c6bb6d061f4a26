"""
Recipe catalog service layer.

Responsibilities:
- Define the Recipe record and the response envelopes shared by every surface.
- Execute composed queries against the relational recipe store.
- Run searches, single-recipe lookups and preset listing for the REST,
  JSON-RPC and chat surfaces alike.
"""
