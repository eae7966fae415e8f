# pairchat/api/chats.py

from fastapi import APIRouter, Depends, Query

from pairchat.api.dependencies import get_chat_interactor, get_current_user
from pairchat.infrastructure import schemas
from pairchat.interactors.chat_interactor import ChatInteractor

router = APIRouter()


@router.get("/getChats", response_model=schemas.ChatsResponse)
async def get_chats(
    since: int = Query(0, description="Only chats active at or after this UNIX ms"),
    chat_interactor: ChatInteractor = Depends(get_chat_interactor),
    current_user: schemas.UserHead = Depends(get_current_user),
):
    chats = await chat_interactor.get_chats(current_user.id, since)
    return schemas.ChatsResponse(chats=chats)


@router.post("/startChat", response_model=schemas.ChatResponse)
async def start_chat(
    request: schemas.StartChatRequest,
    chat_interactor: ChatInteractor = Depends(get_chat_interactor),
    current_user: schemas.UserHead = Depends(get_current_user),
):
    chat = await chat_interactor.start_chat(current_user.id, request.receiver)
    return schemas.ChatResponse(chat=chat)


@router.post("/deleteChat", response_model=schemas.ErrorResponse)
async def delete_chat(
    request: schemas.DeleteChatRequest,
    chat_interactor: ChatInteractor = Depends(get_chat_interactor),
    current_user: schemas.UserHead = Depends(get_current_user),
):
    await chat_interactor.delete_chat(current_user.id, request.chat)
    return schemas.ErrorResponse()
