"""Session Graph Routes — read-only graph snapshot and node profile.

Invariants:
    - Reads never mutate the session
    - Unknown node id → 404 via ResourceNotFoundError and the global handler
"""

from fastapi import APIRouter, Depends

from collective_embedding.api.dependencies import get_engine
from collective_embedding.core.session_engine import SessionEngine
from collective_embedding.schemas.graph import GraphData, NodeProfile

router = APIRouter(prefix="/api/session", tags=["graph"])


@router.get("/graph", response_model=GraphData)
async def get_graph(engine: SessionEngine = Depends(get_engine)):
    """Current graph with derived embedding, centrality, role, and color per node."""
    return GraphData.model_validate(engine.graph_snapshot())


@router.get("/node/{node_id}", response_model=NodeProfile)
async def get_node_profile(node_id: str, engine: SessionEngine = Depends(get_engine)):
    return NodeProfile.model_validate(engine.node_profile(node_id))
