# Services package init
"""
Postboard Backend: Services Layer
==================================

What:  Data-access layer sitting between routes (HTTP) and the database.

Service Inventory:
    - PostService: listings, three-way slug lookup, insert/update/delete
"""
