from fastapi import APIRouter

from shopcurator.config import API_PREFIX

router = APIRouter(prefix=API_PREFIX, tags=["Health"])

@router.get("/health")
def health_root():
    return {"status": "ok"}
