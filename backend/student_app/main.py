"""FastAPI application entrypoint and HTTP controllers.

Controllers are intentionally thin: they accept requests, delegate to
`StudentService` or the Redis `KeyValueCache`, and return JSON.

Endpoints implemented (student and cache routes live under
`/v1/api/students`):
- POST   /addStudent
- GET    /findAll
- GET    /findById/{id}
- GET    /queryByPage?page=0&size=10&sort=percentage   (token)
- GET    /queryByName?name=tommy&page=0&size=10        (token)
- DELETE /deleteById/{id}                              (token)
- PUT    /updateStudent                                (token)
- POST   /redisAdd, GET /redisGet
- POST   /redis/add, GET /redis/get
- GET    /myException and GET /{id}, which fail on purpose to exercise
  the global exception handlers
- GET    /health

Page numbers start at 0. The token may be sent as a `token` header,
query parameter or cookie.
"""

from fastapi import APIRouter, FastAPI, Depends, Query, Request
from fastapi.responses import JSONResponse, Response
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session
from typing import List, Optional
import json
import logging
import time
import uuid
from .database import create_db_and_tables, get_session, ping_database
from . import services
from .auth import get_requested_token, has_token
from .cache import KeyValueCache, get_cache
from .config import settings
from .errors import ApiError, build_error_message, error_response, register_error_handlers
from .schemas import FAILURE, SUCCESS, ApiErrorOut, ResultInfo, StudentIn, StudentOut, StudentUpdate

DEMO_KEY = "admin2019062211"
DEMO_VALUE = "test062211"
DEMO_STUDENT_KEY = "uUserTest0622"

app = FastAPI(title="Student CRUD API")
logger = logging.getLogger("student_app.api")
if not logger.handlers:
    logging.basicConfig(level=settings.LOG_LEVEL)

if settings.ALLOW_DEV_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

register_error_handlers(app)
create_db_and_tables()

students = APIRouter(prefix="/v1/api/students", tags=["students"])


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
    request.state.request_id = req_id
    started = time.perf_counter()
    response: Response = await call_next(request)
    response.headers["X-Request-ID"] = req_id
    elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
    logger.info(
        "request_done %s",
        json.dumps(
            {
                "request_id": req_id,
                "path": request.url.path,
                "method": request.method,
                "status_code": response.status_code,
                "duration_ms": elapsed_ms,
                "client": request.client.host if request.client else "unknown",
            },
            ensure_ascii=True,
        ),
    )
    return response


def _require_login(token: Optional[str]) -> bool:
    if has_token(token):
        return True
    logger.error("Please login the system!")
    return False


def _unauthorized() -> JSONResponse:
    return error_response(401, "401", "Please login the system!", "missing or unknown token")


@students.post('/addStudent', response_model=ApiErrorOut)
def add_student(payload: StudentIn, db: Session = Depends(get_session)):
    """Validate and store a new student.

    The id is generated by the database and must not be sent. A
    persistence failure is reported as a 400 error object.
    """
    svc = services.StudentService(db)
    try:
        student = svc.add(payload)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("[MyException] Add student %s %s", FAILURE, build_error_message(e))
        return error_response(400, "400", "Add user failure!", f"Add user {FAILURE}")
    logger.info("Calling the API Success ======> addStudent : student id=%s", student.id)
    return ApiErrorOut.of(200, "200", "Add user success!", f"Add user {SUCCESS}")


@students.get('/findAll', response_model=List[StudentOut])
def find_all(db: Session = Depends(get_session)):
    logger.info("Calling the API Success ======> findAll")
    return services.StudentService(db).find_all()


@students.get('/findById/{student_id}', response_model=StudentOut)
def find_by_id(student_id: int, db: Session = Depends(get_session)):
    """Return one student or a 404 error object."""
    student = services.StudentService(db).find_by_id(student_id)
    if student is None:
        raise ApiError(404, "404", "Student not found", f"no student with id {student_id}")
    logger.info("Calling the API Success ======> findById : %s", student_id)
    return student


@students.get('/queryByPage', response_model=List[StudentOut])
def query_by_page(
    page: int = Query(ge=0),
    size: int = Query(ge=1, le=settings.MAX_PAGE_SIZE),
    sort: Optional[str] = None,
    token: Optional[str] = Depends(get_requested_token),
    db: Session = Depends(get_session),
):
    """Return one page of students; an empty list without a valid token."""
    if not _require_login(token):
        return []
    try:
        result = services.StudentService(db).query_by_page(page, size, sort)
    except ValueError as e:
        raise ApiError(400, "400", "Invalid page request", str(e))
    logger.info("Calling the API Success ======> queryByPage page=%s size=%s", page, size)
    return result


@students.get('/queryByName', response_model=List[StudentOut])
def query_by_name(
    name: str = Query(min_length=1, max_length=20),
    page: int = Query(ge=0),
    size: int = Query(ge=1, le=settings.MAX_PAGE_SIZE),
    token: Optional[str] = Depends(get_requested_token),
    db: Session = Depends(get_session),
):
    """Return one page of students with exactly this name; empty without a valid token."""
    if not _require_login(token):
        return []
    try:
        result = services.StudentService(db).query_by_name(name, page, size)
    except ValueError as e:
        raise ApiError(400, "400", "Invalid page request", str(e))
    logger.info("Calling the API Success ======> queryByName : name is %s", name)
    return result


@students.delete('/deleteById/{student_id}', response_model=ApiErrorOut)
def delete_by_id(
    student_id: int,
    token: Optional[str] = Depends(get_requested_token),
    db: Session = Depends(get_session),
):
    if not _require_login(token):
        return _unauthorized()
    if not services.StudentService(db).delete_by_id(student_id):
        raise ApiError(404, "404", "Student not found", f"no student with id {student_id}")
    return ApiErrorOut.of(200, "200", "Delete user success!", f"Delete user {SUCCESS}")


@students.put('/updateStudent', response_model=ApiErrorOut)
def update_student(
    payload: StudentUpdate,
    token: Optional[str] = Depends(get_requested_token),
    db: Session = Depends(get_session),
):
    """Overwrite every field of the student identified by `payload.id`."""
    if not _require_login(token):
        return _unauthorized()
    if services.StudentService(db).update(payload) is None:
        raise ApiError(404, "404", "Student not found", f"no student with id {payload.id}")
    return ApiErrorOut.of(200, "200", "Update user success!", f"Update user {SUCCESS}")


@students.post('/redisAdd')
def save_redis(cache: KeyValueCache = Depends(get_cache)):
    cache.set(DEMO_KEY, DEMO_VALUE)


@students.get('/redisGet')
def get_redis(cache: KeyValueCache = Depends(get_cache)) -> Optional[str]:
    return cache.get(DEMO_KEY)


@students.post('/redis/add', response_model=ResultInfo)
def redis_add_user(payload: StudentIn, cache: KeyValueCache = Depends(get_cache)):
    """Store a validated student (without its password) under the demo key."""
    value = payload.model_dump_json(exclude={"password"})
    cache.set(DEMO_STUDENT_KEY, value)
    logger.info("redis saved: [%s]", value)
    return ResultInfo(code=SUCCESS, message="Redis save succeeded")


@students.get('/redis/get', response_model=ResultInfo)
def redis_get_user(cache: KeyValueCache = Depends(get_cache)):
    raw = cache.get(DEMO_STUDENT_KEY)
    logger.info("redis fetched: [%s]", raw)
    data = None
    if raw:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            # values written by other clients may not be JSON
            data = raw
    return ResultInfo(code=SUCCESS, message="Redis query succeeded", data=data)


app.include_router(students)


@app.get("/")
def root():
    """Service name and entry points."""
    return {
        "name": "Student CRUD API",
        "endpoints": {"students": students.prefix, "health": "/health", "docs": "/docs"},
    }


@app.get("/health")
def health(cache: KeyValueCache = Depends(get_cache)):
    """Report database and Redis reachability."""
    db_ok = ping_database()
    redis_ok = cache.ping()
    return {
        "status": "ok" if db_ok else "degraded",
        "database": "connected" if db_ok else "unavailable",
        "redis": "connected" if redis_ok else "unavailable",
    }


@app.get("/myException")
def my_exception():
    """Always fails with a custom ApiError."""
    raise ApiError(400, "empty", "/API/getUserName", "user name was empty while fetching it")


# must stay the last route: it matches any single path segment
@app.get("/{divisor}")
def divide(divisor: int):
    """Compute 1 / divisor; a zero divisor reaches the global exception handler."""
    _ = 1 / divisor
    return "success"


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("student_app.main:app", host="0.0.0.0", port=8000)
