"""
SQL storage backend: one storage_items table holding the key-value pairs that
the JSON backend keeps in a single file.
"""
