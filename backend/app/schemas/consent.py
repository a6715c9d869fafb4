"""
RecipeBox Backend: Cookie Consent Schemas
=========================================

What:  API contract for the /api/consent endpoints.
"""

from pydantic import BaseModel, Field


class ConsentStatusResponse(BaseModel):
    """
    What:  Display flags for the consent banner.
    Who:   Returned by GET/POST /api/consent and embedded in the recipe list.

        - ask_consent:   show the consent prompt
        - has_consent:   non-essential cookies may be set
        - banner_hidden: visitor dismissed the banner for this browser session
    """
    ask_consent: bool = Field(description="Whether the consent prompt should be shown")
    has_consent: bool = Field(description="Whether tracking / non-essential cookies are allowed")
    banner_hidden: bool = Field(default=False, description="Banner dismissed for this session")


class ConsentAnswerRequest(BaseModel):
    """Body of POST /api/consent: the visitor's explicit answer to the prompt."""
    consent: bool = Field(description="True to accept non-essential cookies, False to refuse")
