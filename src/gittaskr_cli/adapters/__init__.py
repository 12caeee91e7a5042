"""Storage adapters for gittaskr.

The only backend is the local SQLite store in `gittaskr_cli.adapters.sqlite`.
"""
