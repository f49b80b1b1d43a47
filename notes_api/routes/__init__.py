# Routes package init
"""
Notes API: Routes Package
==========================

Route Inventory:
    - notes.py:   POST   /notes          (create)
                  GET    /notes          (list, optional ?q= keyword)
                  GET    /notes/{id}     (get)
                  PUT    /notes/{id}     (update)
                  DELETE /notes/{id}     (delete)
    - health.py:  GET    /health         (service health check)

Routes are thin: they pull values out of the request, call NoteService,
and set status codes and headers. Business rules live in the service.
"""
