# Middleware package init
"""
RecipeBox Backend: Middleware Package
=====================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (request direction):
    Request → [Request ID] → [Logging] → [Cookie Consent] → Route Handler

    1. Request ID: correlation ID for every log line of the request
    2. Logging: access log with status and duration
    3. Cookie Consent: resolves the consent decision before the handler runs
       and writes the consent cookie on the way out
"""
