# Routes package init
"""
HeroDex Backend — API Routes Package
======================================

Route Inventory:
    - heroes.py:    GET  /heroes                      (catalog, paginated)
                    GET  /heroes/{id}                 (hero detail)
    - search.py:    POST /search/heroes/by-name       (name prefix)
                    POST /search/heroes/by-min-stats  (powerstat lower bounds)
                    GET  /search                      (combined, query string)
    - comments.py:  POST /heroes/{id}/comments        (create)
                    GET  /heroes/{id}/comments        (list, newest first)
    - health.py:    GET  /                            (welcome)
                    GET  /health                      (service health check)

Routes stay THIN: read the request, call a service, return its model.
Query construction and pagination live in herodex.services.
"""
