# Routes package init
"""
RecipeBox Backend: API Routes Package
=====================================

Route Inventory:
    - recipes.py: GET/POST      /api/recipes
                  GET/PUT/DELETE /api/recipes/{id}
    - consent.py: GET/POST      /api/consent
                  POST          /api/consent/hide-banner
    - health.py:  GET           /health

Routes stay thin: extract request data, call a service, shape the response.
"""
