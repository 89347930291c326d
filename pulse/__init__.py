"""Core (UI-agnostic) office presence logic.

This package contains:
- CSV line tokenizing and value cleaning
- identity (people) cleaning and zone normalization
- spreadsheet date serial conversion and date acceptance policy
- presence aggregation and dashboard row parsing (snapshot records)
- planning filters and statistics (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
"""
