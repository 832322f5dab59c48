import logging

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from . import config
from .auth import current_user, login, register
from .errors import AuthError, ServiceError
from .models import LoginReq, LoginResp, RegisterReq, UserPublic
from .user_store import UserStore

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="Chat AI auth")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[config.CLIENT_ORIGIN],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
    allow_credentials=True,
)
bearer = HTTPBearer(auto_error=False)


def get_store() -> UserStore:
    return UserStore(config.AUTH_DB_PATH)

@app.on_event("startup")
def startup():
    get_store().init_schema()


def _error(status_code: int, kind: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": kind, "message": message})

@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    return _error(exc.status_code, exc.kind, exc.message)

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if any(e.get("type") == "json_invalid" for e in errors):
        return _error(400, "malformed_request", "Request body is not valid JSON")

    # a ("body",) location means the body itself is missing or not an object
    fields = sorted({str(e["loc"][-1]) for e in errors if len(e.get("loc", ())) > 1 and e["loc"][0] == "body"})
    message = f"Missing or invalid fields: {', '.join(fields)}" if fields else "Request body must be a JSON object"
    return _error(400, "validation", message)

@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return _error(500, "internal", "Internal server error")


@app.get("/", response_class=PlainTextResponse)
def root():
    return "Backend is running"

@app.get("/health")
def health():
    return {"ok": True}

@app.post("/auth/register", response_model=UserPublic, status_code=201)
def register_route(req: RegisterReq, store: UserStore = Depends(get_store)):
    return register(store, req.username, req.email, req.password)

@app.post("/auth/login", response_model=LoginResp)
def login_route(req: LoginReq, store: UserStore = Depends(get_store)):
    return login(store, req.email, req.password)

@app.get("/auth/me", response_model=UserPublic)
def me(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
    store: UserStore = Depends(get_store),
):
    if creds is None:
        raise AuthError("Missing bearer token")
    return current_user(store, creds.credentials)
