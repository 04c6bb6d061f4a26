"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Translate free-text recipe requests into search query strings.
- Surface translator failures as TranslatorError; nothing is retried.
"""
