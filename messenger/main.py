import os
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from .routes import router
from .core import init_metrics
from .errors import ChatError
from .models import init_models
import logging
from pythonjsonlogger import jsonlogger

# setup structured logging
logger = logging.getLogger('messenger')
handler = logging.StreamHandler()
formatter = jsonlogger.JsonFormatter('%(asctime)s %(levelname)s %(name)s %(message)s')
handler.setFormatter(formatter)
logger.addHandler(handler)
logger.setLevel(os.getenv('LOG_LEVEL', 'INFO').upper())

app = FastAPI(title="Messenger API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=['*'],
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

app.include_router(router, prefix="/api")

@app.get('/healthz')
async def healthz():
    return {'status': 'ok'}

@app.exception_handler(ChatError)
async def chat_error_handler(request: Request, exc: ChatError):
    logger.info({'msg': 'request_failed', 'path': request.url.path, 'error': type(exc).__name__, 'detail': exc.detail})
    headers = {'WWW-Authenticate': 'Bearer'} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content={'detail': exc.detail}, headers=headers)

@app.middleware('http')
async def log_requests(request: Request, call_next):
    logger.info({'msg':'request_start','method':request.method,'path':request.url.path})
    response = await call_next(request)
    logger.info({'msg':'request_end','status': response.status_code})
    return response

@app.on_event("startup")
async def startup():
    # Best-effort init, don't block app from starting if a dependency fails
    if os.getenv('DB_AUTO_CREATE', '0') == '1':
        try:
            await init_models()
        except Exception as e:
            logger.warning({'msg': 'db_init_failed', 'error': str(e)})
    if os.getenv('METRICS_ENABLED', '1') == '1':
        init_metrics()
