"""
Movie catalog CRUD: `/movies` endpoints backed by the `movies` table.
"""
