from fastapi import APIRouter

from .utils import ApiSuccess, get_worker_info

router = APIRouter()


@router.get('/health', response_model=ApiSuccess)
async def health():
    worker_name, commit_id, instance_id = get_worker_info()
    return ApiSuccess(results={'status': 'OK', 'worker': worker_name, 'commit': commit_id, 'instance': instance_id})
