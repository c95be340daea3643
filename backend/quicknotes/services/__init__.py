# Services package init
"""
QuickNotes Backend — Services Layer
=====================================

What:  Note operations sitting between routes (HTTP) and the storage gateway.

Service Inventory:
    - note_service.py: NoteService — create, get, list, update, delete
"""
