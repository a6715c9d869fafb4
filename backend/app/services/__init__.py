# Services package init
"""
RecipeBox Backend: Services Layer
=================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).

Service Inventory:
    - ConsentService: cookie-consent decision table (pure, no I/O)
    - RecipeService:  recipe CRUD over an AsyncSession

Services never see Request/Response objects; routes and middleware adapt
HTTP to service calls and back.
"""
