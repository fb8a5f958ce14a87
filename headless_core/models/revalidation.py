from pydantic import BaseModel


class RevalidationRequest(BaseModel):
    """JSON body posted to the frontend's revalidation endpoint."""

    secret: str
    slug: str
