# Services package init
"""
Notes API: Services Layer
==========================

What:  Business logic between the routes (HTTP) and the in-memory store.

Service Inventory:
    - NoteService: create / list / get / update / delete over a NoteStore
"""
