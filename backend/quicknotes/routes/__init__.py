# Routes package init
"""
QuickNotes Backend — API Routes Package
=========================================

Route Inventory:
    - notes.py:  POST   /note         (create)
                 GET    /note/{id}    (get one)
                 GET    /notes        (get all)
                 PATCH  /note/{id}    (update)
                 DELETE /note/{id}    (delete)

Routes stay thin: decode the request, call NoteService, pick the status
code. Everything that touches the database lives in the services layer.
"""
