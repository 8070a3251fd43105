"""
API Version 2 Router.

Combines all API endpoints under the /v2 prefix.
"""

from fastapi import APIRouter, Depends

from qaforum.api.negotiation import accept_json
from qaforum.api.v2.endpoints import questions

router = APIRouter(dependencies=[Depends(accept_json)])

# Include endpoint routers
router.include_router(questions.router, tags=["Questions"])

# Endpoint routers, all mounted at the version prefix
endpoint_routers = [questions.router]
