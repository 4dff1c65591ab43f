"""O*NET proxy route: GET /api/onet?path=<upstream path>&<query...>"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from careerquest.dependencies import get_onet_proxy
from careerquest.services.onet_proxy import OnetProxy

router = APIRouter()


@router.get("")
async def proxy_onet(request: Request, proxy: OnetProxy = Depends(get_onet_proxy)):
    """Forward to O*NET with server-side credentials; upstream errors keep their status"""
    params = request.query_params
    result = await proxy.forward(params.get("path"), params.multi_items())
    return JSONResponse(content=result.body, status_code=result.status_code)
