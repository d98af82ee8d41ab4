from fastapi import APIRouter
from .members import router as members_router
from .chats import router as chats_router

router = APIRouter()
router.include_router(members_router, prefix='/members', tags=['members'])
router.include_router(chats_router, prefix='/chats', tags=['chats'])
