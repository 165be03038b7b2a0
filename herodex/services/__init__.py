# Services package init
"""
HeroDex Backend — Services Layer
==================================

What:  Query composition between routes (HTTP) and the database.

Service Inventory:
    - filters:          request parameters → WHERE clauses
    - pagination:       page number → OFFSET/LIMIT, totals → pagination block
    - HeroService:      hero listing, detail and the three searches
    - CommentService:   create and list a hero's comments

Services are stateless; each call receives the request's AsyncSession.
"""
