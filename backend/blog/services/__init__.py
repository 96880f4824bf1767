# Services package init
"""
Blog Backend — Services Layer
==============================

What:  Data access layer sitting between routes (HTTP) and the database.
Why:   Routes handle HTTP details; services own the presence checks and SQL.
How:   Stateless singletons; each call receives the request's AsyncSession.

Service Inventory:
    - PostService: posts CRUD
    - CategoryService: categories CRUD with embedded posts on reads
"""
