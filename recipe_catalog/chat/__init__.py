"""
Chat layer.

Responsibilities:
- Accept free-text recipe requests.
- Translate them into search filters through the injected translator.
- Optionally run the resulting search and phrase a short reply.
"""
