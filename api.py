import logging
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request, Security
from fastapi.middleware.cors import CORSMiddleware
from fastapi.security import APIKeyHeader
from pydantic import BaseModel, Field

from config import settings
from elibrary import (
    AlreadyAvailableError,
    Book,
    CatalogService,
    EmptyHistoryError,
    LibraryError,
    NotFoundError,
    UnavailableError,
    ValidationError,
)

logger = logging.getLogger(__name__)


# --- Models ---
class BookModel(BaseModel):
    title: str
    author: str
    is_available: bool


class BookCreateModel(BaseModel):
    title: str = Field(..., description="Title of the new book")
    author: str = Field(..., description="Author of the new book")


class UndoResponse(BaseModel):
    book: Optional[BookModel] = None
    history_depth: int


class ActionModel(BaseModel):
    kind: str
    item_key: str


class HistoryModel(BaseModel):
    history_depth: int
    can_undo: bool
    actions: List[ActionModel]


class StatsModel(BaseModel):
    total_books: int
    available_books: int
    borrowed_books: int
    unique_authors: int


def _to_model(book: Book) -> BookModel:
    return BookModel(**book.to_dict())


def _refuse(status_code: int, error: LibraryError) -> HTTPException:
    logger.info("Request refused with %d: %s", status_code, error)
    return HTTPException(status_code=status_code, detail=str(error))


# --- Security ---
api_key_header = APIKeyHeader(name="X-API-Key")


def get_api_key(api_key: str = Security(api_key_header)):
    """Dependency that checks the API key."""
    if api_key == settings.api_key:
        return api_key
    raise HTTPException(status_code=403, detail="Could not validate credentials")


def get_service(request: Request) -> CatalogService:
    return request.app.state.service


def create_app(service: Optional[CatalogService] = None) -> FastAPI:
    """Build the API around ``service``; a seeded one is created when omitted."""
    if service is None:
        service = CatalogService.with_sample_inventory() if settings.seed_sample_books else CatalogService()

    app = FastAPI(title=settings.app_name, version=settings.app_version)
    app.state.service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health():
        return {"status": "ok", "version": settings.app_version}

    @app.get("/books", response_model=List[BookModel])
    async def get_books(
        q: Optional[str] = Query(None, description="Search by title or author"),
        service: CatalogService = Depends(get_service),
    ):
        """List every book, or only those matching ``q``."""
        if q is None:
            return [_to_model(b) for b in service.list_all()]
        try:
            books = service.search(q)
        except ValidationError as e:
            raise _refuse(400, e)
        return [_to_model(b) for b in books]

    @app.get("/books/{title}", response_model=BookModel)
    async def get_book(title: str, service: CatalogService = Depends(get_service)):
        book = service.find(title)
        if not book:
            raise HTTPException(status_code=404, detail="Book not found.")
        return _to_model(book)

    @app.post("/books", response_model=BookModel, dependencies=[Depends(get_api_key)])
    async def add_book(payload: BookCreateModel, service: CatalogService = Depends(get_service)):
        try:
            return _to_model(service.add_book(payload.title, payload.author))
        except ValidationError as e:
            raise _refuse(400, e)

    @app.post("/books/{title}/borrow", response_model=BookModel, dependencies=[Depends(get_api_key)])
    async def borrow_book(title: str, service: CatalogService = Depends(get_service)):
        try:
            return _to_model(service.borrow(title))
        except NotFoundError as e:
            raise _refuse(404, e)
        except UnavailableError as e:
            raise _refuse(409, e)

    @app.post("/books/{title}/return", response_model=BookModel, dependencies=[Depends(get_api_key)])
    async def return_book(title: str, service: CatalogService = Depends(get_service)):
        try:
            return _to_model(service.return_book(title))
        except NotFoundError as e:
            raise _refuse(404, e)
        except AlreadyAvailableError as e:
            raise _refuse(409, e)

    @app.post("/undo", response_model=UndoResponse, dependencies=[Depends(get_api_key)])
    async def undo(service: CatalogService = Depends(get_service)):
        """Reverse the most recent borrow or return."""
        try:
            book = service.undo()
        except EmptyHistoryError as e:
            raise _refuse(409, e)
        return UndoResponse(book=_to_model(book) if book else None, history_depth=service.history_depth)

    @app.get("/history", response_model=HistoryModel)
    async def history(service: CatalogService = Depends(get_service)):
        return HistoryModel(
            history_depth=service.history_depth,
            can_undo=service.can_undo,
            actions=[ActionModel(**a.to_dict()) for a in service.history.entries()],
        )

    @app.get("/stats", response_model=StatsModel)
    async def stats(service: CatalogService = Depends(get_service)):
        return StatsModel(**service.get_statistics())

    return app


app = create_app()
