"""Search adapter layer — Pluggable connectors for search backends.

Built-in adapters:
  - solr: Apache Solr v8+ (JSON Request API, matches on the content field)

Implement ``SearchAdapter`` to connect your own search backend.
"""
