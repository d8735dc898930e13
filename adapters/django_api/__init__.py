"""
Khata Django HTTP adapter.
Thin framework glue over the shared-row store.
"""
