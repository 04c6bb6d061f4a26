"""
Offline data ingestion for the recipe catalog.

Responsibilities:
- Read a recipe CSV export.
- Normalize it into the canonical recipe table columns.
- Write the sqlite database the service reads from.
"""
